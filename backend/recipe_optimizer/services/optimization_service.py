"""
Recipe optimization orchestration.

This module is the entry point the HTTP layer uses to rank the catalog. It
combines the ingredient matcher, the recipe scorer and the substitution
service:

- score_all / optimize: rank every recipe by optimization score
- match_by_ingredients: filter recipes by how much of them the pantry covers
- calculate_recipe_with_substitutions / recipe_with_substitutions: suggest
  substitutes for each missing ingredient of one recipe

Scoring runs synchronously over recipes already fetched from the store;
nothing here mutates stored data.
"""

import logging
from typing import List, Optional, Sequence

from recipe_optimizer.models.optimization import OptimizationCriteria, ScoreBreakdown
from recipe_optimizer.models.recipe import MatchedRecipe, Recipe, ScoredRecipe
from recipe_optimizer.models.substitution import (
    RecipeWithSubstitutions,
    SubstitutionSuggestion,
)
from recipe_optimizer.services.ingredient_matcher import find_missing_ingredients
from recipe_optimizer.services.recipe_scorer import RecipeScorer
from recipe_optimizer.services.recipe_store import RecipeStore
from recipe_optimizer.services.substitution_service import SubstitutionService
from recipe_optimizer.utils.constants import DEFAULT_MIN_MATCH_PERCENTAGE
from recipe_optimizer.utils.helpers import calculate_match_percentage

# Configure logging
logger = logging.getLogger(__name__)


class OptimizationService:
    """
    Ranks recipes against user criteria and proposes substitutions.

    Attributes:
        store: Storage backend for recipes and substitutions
        scorer: Recipe scorer
        substitution_service: Substitution lookup service
    """

    def __init__(
        self,
        store: RecipeStore,
        scorer: RecipeScorer,
        substitution_service: SubstitutionService
    ):
        """
        Initialize the optimization service with required services.

        Args:
            store: Recipe store
            scorer: Recipe scorer instance
            substitution_service: Substitution service instance
        """
        self.store = store
        self.scorer = scorer
        self.substitution_service = substitution_service

        logger.info(f"OptimizationService initialized (storage: {store.backend_name})")

    def optimize(self, criteria: OptimizationCriteria) -> List[ScoredRecipe]:
        """
        Rank the whole catalog against the criteria.

        Args:
            criteria: Pantry, restrictions, goals, budget and result limit

        Returns:
            List[ScoredRecipe]: Best recipes first, at most criteria.max_results
        """
        recipes = self.store.find_all()
        logger.info(
            f"Optimizing {len(recipes)} recipe(s) with "
            f"{len(criteria.available_ingredients)} available ingredient(s), "
            f"restrictions={criteria.dietary_restrictions}, "
            f"max_results={criteria.max_results}"
        )
        return self.score_all(recipes, criteria)

    def score_all(
        self,
        recipes: Sequence[Recipe],
        criteria: OptimizationCriteria
    ) -> List[ScoredRecipe]:
        """
        Score, annotate, sort and truncate a recipe collection.

        Algorithm:
        1. Score each recipe (RecipeScorer)
        2. Compute its missing ingredients and match percentage
        3. Sort by score, highest first; ties keep input order
        4. Keep the first criteria.max_results

        Returns:
            List[ScoredRecipe]: Ranked recipes
        """
        available = criteria.available_ingredients
        scored = []

        for recipe in recipes:
            score = self.scorer.calculate_recipe_score(recipe, criteria, available)
            missing = find_missing_ingredients(recipe.ingredients, available)
            scored.append(ScoredRecipe(
                **recipe.model_dump(),
                optimization_score=score,
                missing_ingredients=missing,
                ingredient_match_percentage=calculate_match_percentage(
                    len(recipe.ingredients), len(missing)
                ),
            ))

        ranked = sorted(scored, key=lambda r: r.optimization_score, reverse=True)
        top = ranked[:criteria.max_results]

        logger.info(
            f"Returning {len(top)} recipe(s) out of {len(ranked)} scored"
        )
        return top

    def score_recipe(
        self,
        recipe_id: str,
        criteria: OptimizationCriteria
    ) -> Optional[ScoreBreakdown]:
        """Explain the score of one stored recipe; None if it does not exist."""
        recipe = self.store.find_by_id(recipe_id)
        if recipe is None:
            logger.warning(f"Recipe not found: {recipe_id}")
            return None
        return self.scorer.score_breakdown(recipe, criteria)

    def match_by_ingredients(
        self,
        recipes: Sequence[Recipe],
        available_ingredients: Sequence[str],
        min_match_percentage: float = DEFAULT_MIN_MATCH_PERCENTAGE
    ) -> List[MatchedRecipe]:
        """
        Recipes whose ingredient match percentage reaches a threshold.

        Args:
            recipes: Recipes to consider
            available_ingredients: Pantry ingredient names
            min_match_percentage: Minimum percentage (inclusive)

        Returns:
            List[MatchedRecipe]: Highest match first; ties keep input order
        """
        matched = []
        for recipe in recipes:
            missing = find_missing_ingredients(recipe.ingredients, available_ingredients)
            percentage = calculate_match_percentage(len(recipe.ingredients), len(missing))
            if percentage >= min_match_percentage:
                matched.append(MatchedRecipe(
                    **recipe.model_dump(),
                    ingredient_match_percentage=percentage,
                    missing_ingredients=missing,
                ))

        matched.sort(key=lambda r: r.ingredient_match_percentage, reverse=True)

        logger.info(
            f"{len(matched)} of {len(recipes)} recipe(s) match at least "
            f"{min_match_percentage}% of {len(available_ingredients)} ingredient(s)"
        )
        return matched

    def calculate_recipe_with_substitutions(
        self,
        recipe: Recipe,
        available_ingredients: Sequence[str],
        dietary_restrictions: Optional[Sequence[str]] = None
    ) -> List[SubstitutionSuggestion]:
        """
        Substitution suggestions for every missing ingredient of a recipe.

        Substitute quantities are scaled to the missing ingredient's amount
        and reported in its unit (units are not converted). Missing
        ingredients without any qualifying substitute are left out.

        Args:
            recipe: Recipe to complete
            available_ingredients: Pantry ingredient names
            dietary_restrictions: Tags substitutes should help satisfy

        Returns:
            List[SubstitutionSuggestion]: In missing-ingredient order
        """
        missing_ingredients = find_missing_ingredients(recipe.ingredients, available_ingredients)
        suggestions = []

        for missing in missing_ingredients:
            substitutes = self.substitution_service.find_substitutions(
                missing.name, dietary_restrictions
            )
            if not substitutes:
                continue

            suggestions.append(SubstitutionSuggestion(
                original_ingredient=missing,
                substitutes=[
                    sub.model_copy(update={
                        "adjusted_amount": missing.amount * sub.ratio,
                        "adjusted_unit": missing.unit,
                    })
                    for sub in substitutes
                ],
            ))

        logger.info(
            f"'{recipe.title}': {len(missing_ingredients)} missing ingredient(s), "
            f"{len(suggestions)} with substitutes"
        )
        return suggestions

    def recipe_with_substitutions(
        self,
        recipe_id: str,
        available_ingredients: Sequence[str],
        dietary_restrictions: Optional[Sequence[str]] = None
    ) -> Optional[RecipeWithSubstitutions]:
        """
        Fetch a recipe and attach substitution suggestions.

        Returns:
            RecipeWithSubstitutions: Composite result, or None if the recipe
                                     does not exist
        """
        recipe = self.store.find_by_id(recipe_id)
        if recipe is None:
            logger.warning(f"Recipe not found: {recipe_id}")
            return None

        suggestions = self.calculate_recipe_with_substitutions(
            recipe, available_ingredients, dietary_restrictions
        )
        return RecipeWithSubstitutions(
            recipe=recipe,
            substitution_suggestions=suggestions,
            available_ingredients=list(available_ingredients),
            dietary_restrictions=list(dietary_restrictions or []),
        )

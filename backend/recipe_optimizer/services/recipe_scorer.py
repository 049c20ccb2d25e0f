"""
Rule-based recipe optimization scoring.

This module ranks a recipe against one user's criteria using four
transparent sub-scores, each in [0, 1], combined with fixed weights:

- Ingredient match (40 points): share of ingredients the pantry covers
- Dietary compliance (25 points): all-or-nothing, every restriction must be tagged
- Nutritional alignment (20 points): closeness to calorie / protein targets
- Cost efficiency (15 points): cheaper relative to the budget is better

Total possible score: 100 points, rounded half-up to an integer.

Absent criteria never raise; they fall back to neutral values (dietary 1.0,
nutrition 0.5, cost 0.5). Targets and budgets of 0 count as absent.
"""

import logging
from typing import Dict, Iterable, Optional, Sequence

from recipe_optimizer.models.nutrition import Nutrition, NutritionalGoals
from recipe_optimizer.models.optimization import (
    BudgetConstraints,
    OptimizationCriteria,
    ScoreBreakdown,
)
from recipe_optimizer.models.recipe import Ingredient, Recipe
from recipe_optimizer.services.ingredient_matcher import is_available
from recipe_optimizer.utils.constants import (
    NEUTRAL_COST_SCORE,
    NEUTRAL_NUTRITION_SCORE,
    SCORE_WEIGHTS,
)
from recipe_optimizer.utils.helpers import round_half_up, safe_divide

# Configure logging
logger = logging.getLogger(__name__)


class RecipeScorer:
    """
    Weighted optimization scorer for recipes.

    Stateless apart from its weights: scoring the same inputs twice gives
    the same result.

    Attributes:
        weights: Points per sub-score (ingredient_match, dietary, nutrition, cost)
    """

    def __init__(self, weights: Optional[Dict[str, int]] = None):
        """
        Initialize the scorer.

        Args:
            weights: Override for SCORE_WEIGHTS (keys must match)
        """
        self.weights = dict(weights or SCORE_WEIGHTS)

        logger.info(
            f"RecipeScorer initialized with weights: "
            f"ingredient_match={self.weights['ingredient_match']}, "
            f"dietary={self.weights['dietary']}, "
            f"nutrition={self.weights['nutrition']}, "
            f"cost={self.weights['cost']}"
        )

    def calculate_recipe_score(
        self,
        recipe: Recipe,
        criteria: OptimizationCriteria,
        available_ingredients: Optional[Sequence[str]] = None
    ) -> int:
        """
        Calculate the 0-100 optimization score of a recipe.

        Args:
            recipe: Recipe to score
            criteria: Dietary restrictions, nutritional goals and budget
            available_ingredients: Pantry; defaults to criteria.available_ingredients

        Returns:
            int: Weighted score rounded half-up

        Example:
            scorer = RecipeScorer()
            score = scorer.calculate_recipe_score(recipe, criteria, ["flour", "milk"])
        """
        return self.score_breakdown(recipe, criteria, available_ingredients).score

    def score_breakdown(
        self,
        recipe: Recipe,
        criteria: OptimizationCriteria,
        available_ingredients: Optional[Sequence[str]] = None
    ) -> ScoreBreakdown:
        """
        Score a recipe and expose every sub-score.

        Algorithm:
        1. Ingredient match ratio against the pantry
        2. Dietary compliance against the restrictions
        3. Nutritional alignment against the goals
        4. Cost efficiency against the budget
        5. Weighted sum, rounded half-up

        Returns:
            ScoreBreakdown: Sub-scores in [0, 1] and the final score
        """
        if available_ingredients is None:
            available_ingredients = criteria.available_ingredients

        ingredient_match = self.calculate_ingredient_match(
            recipe.ingredients, available_ingredients
        )
        dietary = self.check_dietary_compliance(
            recipe.dietary_tags, criteria.dietary_restrictions
        )
        nutrition = self.calculate_nutritional_alignment(
            recipe.nutrition, criteria.nutritional_goals
        )
        cost = self.calculate_cost_efficiency(
            recipe.estimated_cost, criteria.budget_constraints
        )

        raw_score = (
            ingredient_match * self.weights["ingredient_match"]
            + dietary * self.weights["dietary"]
            + nutrition * self.weights["nutrition"]
            + cost * self.weights["cost"]
        )
        score = round_half_up(raw_score)

        logger.debug(
            f"Scored '{recipe.title}': match={ingredient_match:.2f}, "
            f"dietary={dietary:.0f}, nutrition={nutrition:.2f}, "
            f"cost={cost:.2f} -> {score}"
        )

        return ScoreBreakdown(
            recipe_id=recipe.id,
            ingredient_match=ingredient_match,
            dietary_compliance=dietary,
            nutritional_alignment=nutrition,
            cost_efficiency=cost,
            score=score,
        )

    def calculate_ingredient_match(
        self,
        ingredients: Sequence[Ingredient],
        available_ingredients: Optional[Sequence[str]]
    ) -> float:
        """
        Fraction of recipe ingredients that are optional or in the pantry.

        Optional ingredients count in both numerator and denominator. An
        empty pantry scores 0 even when every ingredient is optional, and a
        recipe without ingredients scores 0.

        Returns:
            float: Match ratio (0-1)
        """
        if not available_ingredients:
            return 0.0

        matched = sum(
            1 for ingredient in ingredients
            if is_available(ingredient, available_ingredients)
        )
        return safe_divide(matched, len(ingredients))

    def check_dietary_compliance(
        self,
        recipe_tags: Iterable[str],
        dietary_restrictions: Optional[Sequence[str]]
    ) -> float:
        """
        1.0 if the recipe carries every restriction tag, else 0.0.

        No restrictions means full compliance. There is no partial credit.
        """
        if not dietary_restrictions:
            return 1.0

        tags = set(recipe_tags or [])
        return 1.0 if all(restriction in tags for restriction in dietary_restrictions) else 0.0

    def calculate_nutritional_alignment(
        self,
        nutrition: Optional[Nutrition],
        goals: Optional[NutritionalGoals]
    ) -> float:
        """
        Average closeness of the recipe to the calorie and protein targets.

        For each target that is set (non-zero) the factor is
        ``max(0, 1 - |value - target| / target)``. Carb and fat targets are
        not scored. Missing recipe values count as 0.

        Args:
            nutrition: Recipe nutrition per serving
            goals: User targets

        Returns:
            float: Alignment (0-1); 0.5 when no goals or no targets are set
        """
        if goals is None:
            return NEUTRAL_NUTRITION_SCORE

        nutrition = nutrition or Nutrition()
        factors = []

        if goals.target_calories:
            factors.append(
                self._target_closeness(nutrition.calories, goals.target_calories)
            )

        if goals.target_protein:
            factors.append(
                self._target_closeness(nutrition.protein, goals.target_protein)
            )

        if not factors:
            return NEUTRAL_NUTRITION_SCORE
        return sum(factors) / len(factors)

    def calculate_cost_efficiency(
        self,
        estimated_cost: Optional[float],
        budget: Optional[BudgetConstraints]
    ) -> float:
        """
        Cost efficiency relative to the maximum cost per serving.

        Within budget the score is ``1 - cost / max`` (free is 1, exactly at
        the limit is 0). Over budget, or with an unknown cost, it is 0.

        Returns:
            float: Cost efficiency (0-1); 0.5 when no budget limit is set
        """
        if budget is None or not budget.max_cost_per_serving:
            return NEUTRAL_COST_SCORE

        max_cost = budget.max_cost_per_serving
        if estimated_cost is not None and estimated_cost <= max_cost:
            return 1 - (estimated_cost / max_cost)

        return 0.0

    @staticmethod
    def _target_closeness(value: Optional[float], target: float) -> float:
        """Relative closeness of value to a positive target, floored at 0."""
        diff = abs((value or 0) - target)
        return max(0.0, 1 - (diff / target))

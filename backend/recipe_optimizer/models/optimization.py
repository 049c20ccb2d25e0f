"""
Pydantic models for recipe optimization.

This module defines the per-request optimization criteria (pantry,
dietary restrictions, nutritional goals, budget), the ingredient-matching
request, the explainable score breakdown and the response envelopes of the
optimizer endpoints.
"""

from pydantic import Field
from typing import List, Optional

from recipe_optimizer.models.common import CamelModel
from recipe_optimizer.models.nutrition import NutritionalGoals
from recipe_optimizer.models.recipe import MatchedRecipe, ScoredRecipe
from recipe_optimizer.utils.constants import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_MIN_MATCH_PERCENTAGE,
)


class BudgetConstraints(CamelModel):
    """
    Budget limits for an optimization request.

    Attributes:
        max_cost_per_serving: Upper cost per serving; 0 or absent means no limit
        prefer_budget_options: Accepted and echoed back; not used in scoring
    """
    max_cost_per_serving: Optional[float] = Field(None, ge=0, description="Maximum cost per serving")
    prefer_budget_options: bool = Field(False, description="Prefer budget-friendly recipes")


class OptimizationCriteria(CamelModel):
    """
    User criteria for ranking the recipe catalog (POST /api/optimize/recipes).

    Dietary restrictions are free strings: unknown tags are accepted and
    simply never match a recipe tag.

    Attributes:
        available_ingredients: Ingredient names in the user's pantry
        dietary_restrictions: Tags every ranked recipe should carry
        nutritional_goals: Per-serving targets
        budget_constraints: Cost limits
        max_results: Maximum number of recipes returned
    """
    available_ingredients: List[str] = Field(default_factory=list)
    dietary_restrictions: List[str] = Field(default_factory=list)
    nutritional_goals: Optional[NutritionalGoals] = None
    budget_constraints: Optional[BudgetConstraints] = None
    max_results: int = Field(DEFAULT_MAX_RESULTS, ge=1, description="Maximum results")

    model_config = {
        "json_schema_extra": {
            "example": {
                "availableIngredients": ["flour", "milk", "eggs"],
                "dietaryRestrictions": ["vegetarian"],
                "nutritionalGoals": {"targetCalories": 400, "targetProtein": 10},
                "budgetConstraints": {"maxCostPerServing": 5.0},
                "maxResults": 5
            }
        }
    }


class MatchIngredientsRequest(CamelModel):
    """
    Request body of POST /api/optimize/match-ingredients.

    ``available_ingredients`` is optional at the schema level; the endpoint
    rejects a missing or empty list with a 400.
    """
    available_ingredients: Optional[List[str]] = None
    min_match_percentage: float = Field(
        DEFAULT_MIN_MATCH_PERCENTAGE,
        ge=0,
        le=100,
        description="Minimum ingredient match percentage"
    )


class ScoreBreakdown(CamelModel):
    """
    Explainable optimization score of one recipe.

    Each sub-score is in [0, 1]; ``score`` is their weighted, rounded sum.
    """
    recipe_id: Optional[str] = None
    ingredient_match: float
    dietary_compliance: float
    nutritional_alignment: float
    cost_efficiency: float
    score: int


class CriteriaSummary(CamelModel):
    """Echo of the criteria an optimization ran with."""
    available_ingredients: int = Field(..., description="Number of available ingredients")
    dietary_restrictions: List[str]
    nutritional_goals: Optional[NutritionalGoals] = None
    budget_constraints: Optional[BudgetConstraints] = None


class OptimizeResponse(CamelModel):
    success: bool = True
    message: str
    count: int
    optimization_criteria: CriteriaSummary
    data: List[ScoredRecipe]


class MatchCriteria(CamelModel):
    available_ingredients: List[str]
    min_match_percentage: float


class MatchIngredientsResponse(CamelModel):
    success: bool = True
    message: str
    count: int
    criteria: MatchCriteria
    data: List[MatchedRecipe]


class ScoreBreakdownResponse(CamelModel):
    success: bool = True
    data: ScoreBreakdown

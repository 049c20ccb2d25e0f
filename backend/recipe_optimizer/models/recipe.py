"""
Pydantic models for recipe data.

This module defines the stored recipe entity, its ingredients, and the
request/response schemas of the recipe catalog endpoints. Validation here
is the storage boundary: vocabularies (units, categories, cuisines,
dietary tags) and numeric ranges are enforced on every recipe written.
"""

from datetime import datetime
from pydantic import Field, field_validator
from typing import List, Optional

from recipe_optimizer.models.common import CamelModel
from recipe_optimizer.models.nutrition import Nutrition
from recipe_optimizer.utils.constants import (
    CUISINES,
    DIETARY_TAGS,
    DIFFICULTY_LEVELS,
    INGREDIENT_CATEGORIES,
    INGREDIENT_UNITS,
    MAX_DESCRIPTION_LENGTH,
    MAX_SERVINGS,
    MAX_TITLE_LENGTH,
    MIN_SERVINGS,
)


def _check_choice(value: str, choices: List[str], label: str) -> str:
    if value not in choices:
        raise ValueError(
            f"Invalid {label} '{value}'. Valid: {', '.join(choices)}"
        )
    return value


class Ingredient(CamelModel):
    """
    A single ingredient line of a recipe.

    Immutable once attached to a recipe.

    Attributes:
        name: Free-text ingredient name (e.g., "all-purpose flour")
        amount: Quantity in ``unit``
        unit: Measurement unit
        category: Ingredient category
        is_optional: Optional ingredients never count as missing
    """
    name: str = Field(..., min_length=1, description="Ingredient name")
    amount: float = Field(..., ge=0, description="Quantity")
    unit: str = Field(..., description="Measurement unit")
    category: str = Field("other", description="Ingredient category")
    is_optional: bool = Field(False, description="Whether the ingredient can be left out")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "name": "milk",
                "amount": 1.5,
                "unit": "cups",
                "category": "dairy",
                "isOptional": False
            }
        }
    }

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip surrounding whitespace; reject blank names."""
        if not v.strip():
            raise ValueError('Ingredient name cannot be empty')
        return v.strip()

    @field_validator('unit')
    @classmethod
    def validate_unit(cls, v: str) -> str:
        return _check_choice(v, INGREDIENT_UNITS, "unit")

    @field_validator('category')
    @classmethod
    def validate_category(cls, v: str) -> str:
        return _check_choice(v, INGREDIENT_CATEGORIES, "category")


class RecipeCreate(CamelModel):
    """
    Payload for creating a recipe (POST /api/recipes).

    Attributes:
        title: Recipe title
        description: Short description
        servings: Number of servings (1-20)
        prep_time: Preparation time in minutes
        cook_time: Cooking time in minutes
        difficulty: easy / medium / hard
        cuisine: Cuisine type
        dietary_tags: Dietary tags the recipe complies with
        ingredients: Ordered ingredient lines
        instructions: Ordered instruction steps
        nutrition: Nutrition per serving
        estimated_cost: Estimated cost per serving
    """
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH, description="Recipe title")
    description: Optional[str] = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    servings: int = Field(..., ge=MIN_SERVINGS, le=MAX_SERVINGS)
    prep_time: float = Field(..., ge=0, description="Preparation time in minutes")
    cook_time: float = Field(..., ge=0, description="Cooking time in minutes")
    difficulty: str = Field("medium", description="Difficulty level")
    cuisine: str = Field("other", description="Cuisine type")
    dietary_tags: List[str] = Field(default_factory=list, description="Dietary tags")
    ingredients: List[Ingredient] = Field(default_factory=list, description="Ingredient lines")
    instructions: List[str] = Field(..., min_length=1, description="Instruction steps")
    nutrition: Optional[Nutrition] = Field(None, description="Nutrition per serving")
    estimated_cost: Optional[float] = Field(None, ge=0, description="Estimated cost per serving")

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Pancakes",
                "description": "Fluffy breakfast pancakes",
                "servings": 4,
                "prepTime": 10,
                "cookTime": 15,
                "difficulty": "easy",
                "cuisine": "american",
                "dietaryTags": ["vegetarian"],
                "ingredients": [
                    {"name": "flour", "amount": 2, "unit": "cups", "category": "grain"},
                    {"name": "milk", "amount": 1.5, "unit": "cups", "category": "dairy"},
                    {"name": "vanilla", "amount": 1, "unit": "tsp", "isOptional": True}
                ],
                "instructions": ["Mix the batter", "Cook on a hot griddle"],
                "nutrition": {"calories": 400, "protein": 10},
                "estimatedCost": 3.0
            }
        }
    }

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Recipe title cannot be empty')
        return v.strip()

    @field_validator('difficulty')
    @classmethod
    def validate_difficulty(cls, v: str) -> str:
        return _check_choice(v, DIFFICULTY_LEVELS, "difficulty")

    @field_validator('cuisine')
    @classmethod
    def validate_cuisine(cls, v: str) -> str:
        return _check_choice(v, CUISINES, "cuisine")

    @field_validator('dietary_tags')
    @classmethod
    def validate_dietary_tags(cls, v: List[str]) -> List[str]:
        for tag in v:
            _check_choice(tag, DIETARY_TAGS, "dietary tag")
        return v

    @field_validator('instructions')
    @classmethod
    def validate_instructions(cls, v: List[str]) -> List[str]:
        if any(not step or not step.strip() for step in v):
            raise ValueError('Instruction steps cannot be empty')
        return v


class Recipe(RecipeCreate):
    """Stored recipe: a validated payload plus identity and timestamps."""
    id: str = Field(..., description="Unique recipe identifier")
    created_at: Optional[datetime] = Field(None, description="Creation time (UTC)")
    updated_at: Optional[datetime] = Field(None, description="Last update time (UTC)")


class RecipeUpdate(CamelModel):
    """
    Partial update payload (PUT /api/recipes/{id}).

    Only the fields present in the request are applied; the merged recipe is
    validated again as a whole before it is stored.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    servings: Optional[int] = None
    prep_time: Optional[float] = None
    cook_time: Optional[float] = None
    difficulty: Optional[str] = None
    cuisine: Optional[str] = None
    dietary_tags: Optional[List[str]] = None
    ingredients: Optional[List[Ingredient]] = None
    instructions: Optional[List[str]] = None
    nutrition: Optional[Nutrition] = None
    estimated_cost: Optional[float] = None


class ScoredRecipe(Recipe):
    """
    A recipe ranked by the optimizer.

    Attributes:
        optimization_score: Weighted 0-100 score
        missing_ingredients: Required ingredients not covered by the pantry
        ingredient_match_percentage: Share of ingredients not missing (0-100)
    """
    optimization_score: int = Field(..., description="Optimization score (0-100)")
    missing_ingredients: List[Ingredient] = Field(default_factory=list)
    ingredient_match_percentage: int = Field(..., description="Ingredient match percentage")


class MatchedRecipe(Recipe):
    """A recipe annotated with how much of it the pantry covers."""
    ingredient_match_percentage: int = Field(..., description="Ingredient match percentage")
    missing_ingredients: List[Ingredient] = Field(default_factory=list)


class RecipeResponse(CamelModel):
    """Envelope for a single recipe."""
    success: bool = True
    message: Optional[str] = None
    data: Recipe


class RecipeListResponse(CamelModel):
    """Envelope for a list of recipes."""
    success: bool = True
    count: int
    data: List[Recipe]

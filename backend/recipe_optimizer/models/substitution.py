"""
Pydantic models for ingredient substitutions.

This module defines the registered substitution catalog (one entry per
normalized ingredient name, each holding ordered substitutes) and the
result shapes returned by substitution lookups and by the
recipe-with-substitutions workflow.
"""

from datetime import datetime
from pydantic import Field, field_validator
from typing import List, Optional

from recipe_optimizer.models.common import CamelModel
from recipe_optimizer.models.recipe import Ingredient, Recipe
from recipe_optimizer.utils.constants import DIETARY_TAGS
from recipe_optimizer.utils.helpers import normalize_ingredient_key


class NutritionalImpact(CamelModel):
    """Per-serving nutrition deltas of using the substitute instead of the original."""
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0


class Substitute(CamelModel):
    """
    A registered alternative for an ingredient.

    Attributes:
        ingredient: Substitute ingredient name
        ratio: Multiplicative conversion from original quantity to substitute quantity
        dietary_benefits: Dietary tags the substitute helps satisfy
        cost_factor: Relative cost versus the original (1 = same cost)
        nutritional_impact: Nutrition deltas
        notes: Free-text usage notes
    """
    ingredient: str = Field(..., min_length=1, description="Substitute ingredient name")
    ratio: float = Field(1, description="Conversion ratio from the original quantity")
    dietary_benefits: List[str] = Field(default_factory=list, description="Dietary tags satisfied")
    cost_factor: float = Field(1, description="Relative cost factor")
    nutritional_impact: NutritionalImpact = Field(default_factory=NutritionalImpact)
    notes: Optional[str] = Field(None, description="Usage notes")

    model_config = {
        "json_schema_extra": {
            "example": {
                "ingredient": "almond milk",
                "ratio": 1,
                "dietaryBenefits": ["vegan", "dairy-free"],
                "costFactor": 1.3,
                "nutritionalImpact": {"calories": -60, "protein": -7, "carbs": -10, "fat": -2},
                "notes": "Unsweetened works best for savory dishes"
            }
        }
    }

    @field_validator('ingredient')
    @classmethod
    def validate_ingredient(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Substitute ingredient cannot be empty')
        return v.strip()

    @field_validator('dietary_benefits')
    @classmethod
    def validate_dietary_benefits(cls, v: List[str]) -> List[str]:
        for tag in v:
            if tag not in DIETARY_TAGS:
                raise ValueError(
                    f"Invalid dietary tag '{tag}'. "
                    f"Valid: {', '.join(DIETARY_TAGS)}"
                )
        return v


class SubstitutionEntryCreate(CamelModel):
    """
    Payload registering the substitutes of one ingredient.

    ``original_ingredient`` is normalized (trimmed, lower-cased) so that
    lookups are case-insensitive exact matches.
    """
    original_ingredient: str = Field(..., min_length=1, description="Ingredient being replaced")
    substitutes: List[Substitute] = Field(default_factory=list)

    @field_validator('original_ingredient')
    @classmethod
    def normalize_original(cls, v: str) -> str:
        key = normalize_ingredient_key(v)
        if not key:
            raise ValueError('Original ingredient cannot be empty')
        return key


class SubstitutionEntry(SubstitutionEntryCreate):
    """Stored substitution entry."""
    id: str = Field(..., description="Unique entry identifier")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SubstituteResult(Substitute):
    """
    A substitute adjusted to the quantity being replaced.

    Attributes:
        adjusted_amount: Quantity of the substitute to use
        adjusted_unit: Unit of ``adjusted_amount`` (the original's unit)
        original_amount: Requested quantity of the original, if any
        original_unit: Requested unit of the original, if any
    """
    adjusted_amount: float = Field(..., description="Quantity of substitute to use")
    adjusted_unit: Optional[str] = None
    original_amount: Optional[float] = None
    original_unit: Optional[str] = None


class SubstitutionSuggestion(CamelModel):
    """Substitutes proposed for one missing recipe ingredient."""
    original_ingredient: Ingredient
    substitutes: List[SubstituteResult]


class SubstitutionLookupRequest(CamelModel):
    """
    Request body of POST /api/optimize/substitutions.

    ``ingredient_name`` is optional at the schema level so that a missing
    name is reported as a 400 by the endpoint rather than a 422.
    """
    ingredient_name: Optional[str] = Field(None, description="Ingredient to replace")
    amount: Optional[float] = Field(None, ge=0, description="Quantity to replace")
    unit: Optional[str] = Field(None, description="Unit of the quantity")
    dietary_restrictions: List[str] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "example": {
                "ingredientName": "milk",
                "amount": 2,
                "unit": "cups",
                "dietaryRestrictions": ["vegan"]
            }
        }
    }


class OriginalIngredientInfo(CamelModel):
    name: str
    amount: Optional[float] = None
    unit: Optional[str] = None


class SubstitutionLookupResponse(CamelModel):
    """Envelope of a successful substitution lookup."""
    success: bool = True
    message: str
    original_ingredient: OriginalIngredientInfo
    count: int
    data: List[SubstituteResult]


class SubstitutionEntryResponse(CamelModel):
    success: bool = True
    message: str
    data: SubstitutionEntry


class SubstitutionEntryListResponse(CamelModel):
    """Envelope listing every registered substitution entry."""
    success: bool = True
    count: int
    data: List[SubstitutionEntry]


class RecipeWithSubstitutionsRequest(CamelModel):
    """Request body of POST /api/optimize/recipe-with-substitutions."""
    recipe_id: str = Field(..., min_length=1, description="Recipe identifier")
    available_ingredients: List[str] = Field(default_factory=list)
    dietary_restrictions: List[str] = Field(default_factory=list)


class RecipeWithSubstitutions(CamelModel):
    """
    A recipe together with substitution suggestions for what is missing.

    Attributes:
        recipe: The stored recipe
        substitution_suggestions: One entry per missing ingredient that has substitutes
        available_ingredients: Pantry the suggestions were computed against
        dietary_restrictions: Restrictions substitutes were filtered by
    """
    recipe: Recipe
    substitution_suggestions: List[SubstitutionSuggestion]
    available_ingredients: List[str]
    dietary_restrictions: List[str]


class RecipeWithSubstitutionsResponse(RecipeWithSubstitutions):
    success: bool = True
    message: str

"""
Pydantic models for nutrition data.

This module defines the per-serving nutrition facts stored with a recipe
and the nutritional targets a user optimizes against.
"""

from pydantic import Field
from typing import Optional

from recipe_optimizer.models.common import CamelModel


class Nutrition(CamelModel):
    """
    Nutrition facts per serving.

    Every value is optional; scoring treats an absent value as 0.

    Attributes:
        calories: Total calories
        protein: Protein in grams
        carbs: Carbohydrates in grams
        fat: Total fat in grams
        fiber: Dietary fiber in grams
        sodium: Sodium in milligrams
    """
    calories: Optional[float] = Field(None, ge=0, description="Total calories per serving")
    protein: Optional[float] = Field(None, ge=0, description="Protein in grams")
    carbs: Optional[float] = Field(None, ge=0, description="Carbohydrates in grams")
    fat: Optional[float] = Field(None, ge=0, description="Total fat in grams")
    fiber: Optional[float] = Field(None, ge=0, description="Dietary fiber in grams")
    sodium: Optional[float] = Field(None, ge=0, description="Sodium in milligrams")

    model_config = {
        "json_schema_extra": {
            "example": {
                "calories": 400.0,
                "protein": 10.0,
                "carbs": 50.0,
                "fat": 15.0,
                "fiber": 3.0,
                "sodium": 320.0
            }
        }
    }


class NutritionalGoals(CamelModel):
    """
    Per-serving nutritional targets supplied with an optimization request.

    A target of 0 is treated the same as an absent target. Only calories
    and protein take part in scoring; carbs and fat are accepted and echoed
    back but not evaluated.
    """
    target_calories: Optional[float] = Field(None, ge=0, description="Target calories per serving")
    target_protein: Optional[float] = Field(None, ge=0, description="Target protein (g)")
    target_carbs: Optional[float] = Field(None, ge=0, description="Target carbohydrates (g)")
    target_fat: Optional[float] = Field(None, ge=0, description="Target fat (g)")

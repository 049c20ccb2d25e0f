"""
Centralized constants and configuration data.

This module contains the fixed vocabularies, scoring weights and neutral
values used throughout the application. Centralizing these values makes
them easy to modify and maintain.

Categories:
- Dietary tag vocabulary
- Recipe and ingredient enumerations
- Optimization score weights
- Neutral sub-scores and defaults
"""

from typing import Dict, List

# ==============================================================================
# DIETARY TAGS
# ==============================================================================

DIETARY_TAGS: List[str] = [
    "vegetarian",
    "vegan",
    "gluten-free",
    "dairy-free",
    "keto",
    "paleo",
    "low-carb",
    "high-protein",
]


# ==============================================================================
# RECIPE / INGREDIENT ENUMERATIONS
# ==============================================================================

INGREDIENT_UNITS: List[str] = [
    "cups", "tbsp", "tsp", "oz", "lbs", "grams", "kg", "ml", "liters",
    "pieces", "cloves",
]

INGREDIENT_CATEGORIES: List[str] = [
    "protein", "vegetable", "fruit", "grain", "dairy", "spice", "oil", "other",
]

DIFFICULTY_LEVELS: List[str] = ["easy", "medium", "hard"]

CUISINES: List[str] = [
    "italian", "chinese", "indian", "mexican", "american", "french", "thai",
    "other",
]

# Field limits enforced on stored recipes
MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MIN_SERVINGS = 1
MAX_SERVINGS = 20


# ==============================================================================
# OPTIMIZATION SCORING
# ==============================================================================

# Points each sub-score contributes to the 0-100 optimization score
SCORE_WEIGHTS: Dict[str, int] = {
    "ingredient_match": 40,
    "dietary": 25,
    "nutrition": 20,
    "cost": 15,
}

# Returned when the user supplied no nutritional goals / no budget
NEUTRAL_NUTRITION_SCORE = 0.5
NEUTRAL_COST_SCORE = 0.5


# ==============================================================================
# DEFAULTS
# ==============================================================================

DEFAULT_MAX_RESULTS = 10
DEFAULT_MIN_MATCH_PERCENTAGE = 50

# Unit reported for a substitute when the caller gave none
PLACEHOLDER_UNIT = "unit"

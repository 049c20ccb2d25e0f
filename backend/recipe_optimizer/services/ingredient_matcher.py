"""
Pantry-to-recipe ingredient matching.

An ingredient is considered covered by the pantry when, case-insensitively,
its name contains a pantry entry or a pantry entry contains its name
("milk" covers "whole milk" and "whole milk" covers "milk"). Matching is
purely substring-based; there is no stemming or synonym handling.

Optional ingredients are never reported as missing.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from recipe_optimizer.models.recipe import Ingredient

# Configure logging
logger = logging.getLogger(__name__)


def matches_available(
    ingredient_name: str,
    available_ingredients: Optional[Iterable[str]]
) -> bool:
    """
    Bidirectional, case-insensitive substring test against the pantry.

    Args:
        ingredient_name: Recipe ingredient name
        available_ingredients: Pantry ingredient names (None treated as empty)

    Returns:
        bool: True if any pantry entry contains the name or is contained in it

    Example:
        >>> matches_available("Whole Milk", ["milk"])
        True
        >>> matches_available("flour", ["all-purpose FLOUR"])
        True
    """
    if not available_ingredients:
        return False

    name = ingredient_name.lower()
    for available in available_ingredients:
        candidate = available.lower()
        if name in candidate or candidate in name:
            return True
    return False


def is_available(
    ingredient: Ingredient,
    available_ingredients: Optional[Iterable[str]]
) -> bool:
    """True if the ingredient is optional or covered by the pantry."""
    return ingredient.is_optional or matches_available(ingredient.name, available_ingredients)


def find_missing_ingredients(
    ingredients: Sequence[Ingredient],
    available_ingredients: Optional[Sequence[str]]
) -> List[Ingredient]:
    """
    Required ingredients the pantry does not cover.

    With an empty or absent pantry every required ingredient is missing.
    Input order is preserved.

    Args:
        ingredients: Recipe ingredient lines
        available_ingredients: Pantry ingredient names

    Returns:
        List[Ingredient]: Missing ingredients (never optional ones)
    """
    missing = [
        ingredient for ingredient in ingredients
        if not is_available(ingredient, available_ingredients)
    ]
    logger.debug(
        f"{len(missing)} of {len(ingredients)} ingredient(s) missing "
        f"against {len(available_ingredients or [])} available"
    )
    return missing

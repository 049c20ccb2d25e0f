"""
Input validation utilities.

This module provides validation functions for request input that the
HTTP layer checks before invoking the optimizer. Each validator returns
True or raises ValueError with a message suitable for a 400 response.
"""

import re
import logging
from typing import List, Optional

# Configure logging
logger = logging.getLogger(__name__)

# Patterns rejected in free-text ingredient names
_DANGEROUS_PATTERNS = [
    r'<script',
    r'javascript:',
    r'on\w+\s*=',
]


def validate_ingredient_name(name: Optional[str]) -> bool:
    """
    Validate the ingredient name of a substitution lookup.

    Args:
        name: Ingredient name from the request body

    Returns:
        bool: True if valid

    Raises:
        ValueError: If the name is missing, blank or too long
    """
    if not name or not name.strip():
        raise ValueError("Ingredient name is required")

    if len(name) > 200:
        raise ValueError("Ingredient name cannot exceed 200 characters")

    for pattern in _DANGEROUS_PATTERNS:
        if re.search(pattern, name, re.IGNORECASE):
            raise ValueError("Ingredient name contains invalid characters")

    logger.debug(f"Ingredient name validated: {name}")
    return True


def validate_ingredient_list(ingredients: Optional[List[str]]) -> bool:
    """
    Validate a list of available ingredient names.

    Ensures ingredient list:
    - Is not empty
    - Does not exceed 100 entries
    - Contains no excessively long entries

    Args:
        ingredients: List of ingredient strings

    Returns:
        bool: True if valid

    Raises:
        ValueError: If validation fails with specific error message
    """
    if not ingredients:
        raise ValueError("Available ingredients are required")

    if len(ingredients) > 100:
        raise ValueError(
            "Ingredient list cannot exceed 100 items "
            "(got {})".format(len(ingredients))
        )

    for i, ingredient in enumerate(ingredients):
        if len(ingredient) > 500:
            raise ValueError(
                f"Ingredient at index {i} exceeds maximum length of 500 characters"
            )

    logger.debug(f"Ingredient list validated: {len(ingredients)} ingredients")
    return True


def validate_recipe_id(recipe_id: Optional[str]) -> bool:
    """
    Validate recipe ID format.

    Accepts both in-memory ids (uuid hex) and MongoDB ObjectId strings.

    Raises:
        ValueError: If validation fails
    """
    if not recipe_id or not recipe_id.strip():
        raise ValueError("Recipe ID cannot be empty")

    if len(recipe_id) > 100:
        raise ValueError("Recipe ID cannot exceed 100 characters")

    if not re.match(r'^[a-zA-Z0-9_-]+$', recipe_id):
        raise ValueError(
            "Recipe ID must contain only alphanumeric characters, "
            "hyphens, and underscores"
        )

    return True

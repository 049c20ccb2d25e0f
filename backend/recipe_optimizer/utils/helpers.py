"""
Common utility helper functions.

This module provides reusable utility functions for calculations,
normalization and rounding used throughout the application.
"""

import math
import logging

# Configure logging
logger = logging.getLogger(__name__)


def normalize_ingredient_key(ingredient: str) -> str:
    """
    Normalize an ingredient name into a substitution lookup key.

    Only trims surrounding whitespace and lower-cases; no quantity or
    descriptor stripping is performed, so "Whole Milk" and "milk" are
    different keys.

    Args:
        ingredient: Raw ingredient name

    Returns:
        str: Normalized key ("" for empty input)

    Example:
        >>> normalize_ingredient_key("  MILK ")
        "milk"
    """
    if not ingredient:
        return ""
    return ingredient.strip().lower()


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, with halves rounded towards +infinity.

    Python's built-in round() uses banker's rounding (round(2.5) == 2);
    scores and percentages are reported with half-up rounding instead.

    Args:
        value: Number to round

    Returns:
        int: Rounded value

    Example:
        >>> round_half_up(66.5)
        67
        >>> round_half_up(-0.5)
        0
    """
    return int(math.floor(value + 0.5))


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safely divide two numbers, returning default if denominator is zero.

    Args:
        numerator: Numerator value
        denominator: Denominator value
        default: Default value to return if division by zero (default: 0.0)

    Returns:
        float: Result of division or default value
    """
    if denominator == 0:
        return default
    return numerator / denominator


def calculate_match_percentage(total_count: int, missing_count: int) -> int:
    """
    Percentage of a recipe's ingredients that are not missing.

    Optional ingredients count in the total and are never missing, so they
    always raise the percentage. A recipe without ingredients is 0%.

    Example:
        >>> calculate_match_percentage(3, 1)
        67
    """
    ratio = safe_divide(total_count - missing_count, total_count)
    return round_half_up(ratio * 100)

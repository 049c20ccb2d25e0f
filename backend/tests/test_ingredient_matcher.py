from recipe_optimizer.models.recipe import Ingredient
from recipe_optimizer.services.ingredient_matcher import (
    find_missing_ingredients,
    is_available,
    matches_available,
)


def test_substring_match_works_both_ways():
    assert matches_available("whole milk", ["milk"])
    assert matches_available("milk", ["Whole Milk"])
    assert matches_available("FLOUR", ["all-purpose flour"])


def test_no_match_for_unrelated_names():
    assert not matches_available("butter", ["milk", "flour"])


def test_empty_or_missing_pantry_never_matches():
    assert not matches_available("milk", [])
    assert not matches_available("milk", None)


def test_optional_ingredient_is_always_available():
    vanilla = Ingredient(name="vanilla", amount=1, unit="tsp", is_optional=True)
    assert is_available(vanilla, [])


def test_find_missing_skips_optional_and_keeps_order():
    ingredients = [
        Ingredient(name="flour", amount=2, unit="cups"),
        Ingredient(name="milk", amount=1.5, unit="cups"),
        Ingredient(name="vanilla", amount=1, unit="tsp", is_optional=True),
        Ingredient(name="eggs", amount=2, unit="pieces"),
    ]

    missing = find_missing_ingredients(ingredients, ["flour"])

    assert [i.name for i in missing] == ["milk", "eggs"]


def test_empty_pantry_reports_every_required_ingredient():
    ingredients = [
        Ingredient(name="flour", amount=2, unit="cups"),
        Ingredient(name="vanilla", amount=1, unit="tsp", is_optional=True),
    ]

    missing = find_missing_ingredients(ingredients, [])

    assert [i.name for i in missing] == ["flour"]


def test_missing_pantry_never_reports_optional_ingredients():
    ingredients = [
        Ingredient(name="vanilla", amount=1, unit="tsp", is_optional=True),
        Ingredient(name="flour", amount=2, unit="cups"),
    ]

    missing = find_missing_ingredients(ingredients, None)

    assert [i.name for i in missing] == ["flour"]

import os

# Tests always run against the in-memory store
os.environ["STORAGE_BACKEND"] = "memory"

import pytest

from recipe_optimizer.models.recipe import Ingredient, Recipe
from recipe_optimizer.models.substitution import SubstitutionEntryCreate
from recipe_optimizer.services.recipe_store import InMemoryRecipeStore


def build_recipe(recipe_id="r1", ingredients=None, **overrides):
    """Recipe with sensible defaults; ingredients given as (name, amount, unit[, optional])."""
    lines = ingredients if ingredients is not None else [("flour", 2, "cups")]
    data = {
        "id": recipe_id,
        "title": f"Recipe {recipe_id}",
        "servings": 2,
        "prep_time": 10,
        "cook_time": 20,
        "instructions": ["Mix", "Cook"],
        "ingredients": [
            Ingredient(
                name=line[0],
                amount=line[1],
                unit=line[2],
                is_optional=line[3] if len(line) > 3 else False,
            )
            for line in lines
        ],
    }
    data.update(overrides)
    return Recipe(**data)


@pytest.fixture
def make_recipe():
    return build_recipe


@pytest.fixture
def store():
    return InMemoryRecipeStore()


@pytest.fixture
def milk_entry():
    return SubstitutionEntryCreate(
        original_ingredient="milk",
        substitutes=[
            {"ingredient": "almond milk", "ratio": 1, "dietaryBenefits": ["vegan", "dairy-free"]},
            {"ingredient": "lactose-free milk", "ratio": 1, "dietaryBenefits": ["dairy-free"]},
            {"ingredient": "evaporated milk", "ratio": 0.5, "notes": "Dilute with water"},
        ],
    )

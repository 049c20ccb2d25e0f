import pytest

from recipe_optimizer.models.optimization import OptimizationCriteria
from recipe_optimizer.models.recipe import RecipeCreate
from recipe_optimizer.services.optimization_service import OptimizationService
from recipe_optimizer.services.recipe_scorer import RecipeScorer
from recipe_optimizer.services.substitution_service import SubstitutionService

PANCAKE_LINES = [("flour", 2, "cups"), ("milk", 1.5, "cups"), ("vanilla", 1, "tsp", True)]


@pytest.fixture
def service(store):
    return OptimizationService(store, RecipeScorer(), SubstitutionService(store))


class TestScoreAll:

    def test_annotates_missing_and_match_percentage(self, service, make_recipe):
        recipe = make_recipe(ingredients=PANCAKE_LINES)

        ranked = service.score_all([recipe], OptimizationCriteria(available_ingredients=["flour"]))

        assert len(ranked) == 1
        assert [i.name for i in ranked[0].missing_ingredients] == ["milk"]
        assert ranked[0].ingredient_match_percentage == 67
        assert ranked[0].optimization_score == 69

    def test_sorted_descending_and_stable_on_ties(self, service, make_recipe):
        a = make_recipe("a", ingredients=[("butter", 1, "tbsp")])
        b = make_recipe("b", ingredients=[("flour", 1, "cups")])
        c = make_recipe("c", ingredients=[("sugar", 1, "cups")])

        ranked = service.score_all([a, b, c], OptimizationCriteria(available_ingredients=["flour"]))

        assert [r.id for r in ranked] == ["b", "a", "c"]

    def test_truncates_to_max_results(self, service, make_recipe):
        recipes = [make_recipe(str(i)) for i in range(5)]

        ranked = service.score_all(
            recipes, OptimizationCriteria(available_ingredients=["flour"], max_results=2)
        )

        assert [r.id for r in ranked] == ["0", "1"]

    def test_empty_pantry_still_reports_missing(self, service, make_recipe):
        recipe = make_recipe(ingredients=PANCAKE_LINES)

        ranked = service.score_all([recipe], OptimizationCriteria())

        assert [i.name for i in ranked[0].missing_ingredients] == ["flour", "milk"]
        assert ranked[0].ingredient_match_percentage == 33

    def test_optimize_reads_from_store(self, service, store):
        store.create_recipe(RecipeCreate(
            title="Toast",
            servings=1,
            prep_time=1,
            cook_time=2,
            ingredients=[{"name": "bread", "amount": 2, "unit": "pieces"}],
            instructions=["Toast the bread"],
        ))

        ranked = service.optimize(OptimizationCriteria(available_ingredients=["bread"]))

        assert [r.title for r in ranked] == ["Toast"]
        assert ranked[0].ingredient_match_percentage == 100


class TestMatchByIngredients:

    def test_filters_by_threshold_inclusive(self, service, make_recipe):
        half = make_recipe("half", ingredients=[("flour", 1, "cups"), ("milk", 1, "cups")])
        none = make_recipe("none", ingredients=[("sugar", 1, "cups"), ("salt", 1, "tsp")])

        matched = service.match_by_ingredients([half, none], ["flour"], 50)

        assert [r.id for r in matched] == ["half"]
        assert matched[0].ingredient_match_percentage == 50

    def test_sorted_by_match_percentage(self, service, make_recipe):
        half = make_recipe("half", ingredients=[("flour", 1, "cups"), ("milk", 1, "cups")])
        full = make_recipe("full", ingredients=[("flour", 1, "cups")])

        matched = service.match_by_ingredients([half, full], ["flour"], 0)

        assert [r.id for r in matched] == ["full", "half"]

    def test_recipe_without_ingredients_is_zero_percent(self, service, make_recipe):
        empty = make_recipe("empty", ingredients=[])

        assert service.match_by_ingredients([empty], ["flour"], 1) == []
        assert service.match_by_ingredients([empty], ["flour"], 0)[0].ingredient_match_percentage == 0


class TestRecipeWithSubstitutions:

    def test_scales_substitutes_to_missing_amount(self, service, store, milk_entry, make_recipe):
        store.add_substitution(milk_entry)
        recipe = make_recipe(ingredients=PANCAKE_LINES)

        suggestions = service.calculate_recipe_with_substitutions(recipe, ["flour"], ["vegan"])

        assert len(suggestions) == 1
        assert suggestions[0].original_ingredient.name == "milk"
        assert len(suggestions[0].substitutes) == 1
        substitute = suggestions[0].substitutes[0]
        assert substitute.ingredient == "almond milk"
        assert substitute.adjusted_amount == 1.5
        assert substitute.adjusted_unit == "cups"

    def test_missing_ingredients_without_substitutes_are_skipped(self, service, make_recipe):
        recipe = make_recipe(ingredients=PANCAKE_LINES)

        assert service.calculate_recipe_with_substitutions(recipe, ["flour"]) == []

    def test_recipe_with_substitutions_composes_result(self, service, store, milk_entry):
        store.add_substitution(milk_entry)
        saved = store.create_recipe(RecipeCreate(
            title="Pancakes",
            servings=4,
            prep_time=10,
            cook_time=15,
            ingredients=[
                {"name": "flour", "amount": 2, "unit": "cups"},
                {"name": "milk", "amount": 1.5, "unit": "cups"},
            ],
            instructions=["Mix", "Cook"],
        ))

        result = service.recipe_with_substitutions(saved.id, ["flour"], [])

        assert result.recipe.id == saved.id
        assert result.available_ingredients == ["flour"]
        assert result.dietary_restrictions == []
        assert [s.adjusted_amount for s in result.substitution_suggestions[0].substitutes] == [1.5, 1.5, 0.75]

    def test_unknown_recipe_returns_none(self, service):
        assert service.recipe_with_substitutions("missing", ["flour"]) is None
        assert service.score_recipe("missing", OptimizationCriteria()) is None

from unittest.mock import MagicMock

import pytest

from recipe_optimizer.services.substitution_service import SubstitutionService


@pytest.fixture
def service(store, milk_entry):
    store.add_substitution(milk_entry)
    return SubstitutionService(store)


class TestFindSubstitutions:

    def test_lookup_is_case_insensitive(self, service):
        upper = service.find_substitutions("MILK")
        lower = service.find_substitutions("  milk ")
        assert [s.ingredient for s in upper] == [s.ingredient for s in lower]
        assert len(upper) == 3

    def test_lookup_is_exact_not_substring(self, service):
        assert service.find_substitutions("whole milk") == []

    def test_unknown_ingredient_returns_empty(self, service):
        assert service.find_substitutions("saffron") == []

    def test_adjusted_amount_defaults_to_ratio(self, service):
        results = service.find_substitutions("milk")
        assert [r.adjusted_amount for r in results] == [1, 1, 0.5]

    def test_filters_by_any_matching_benefit(self, service):
        vegan = service.find_substitutions("milk", ["vegan"])
        assert [s.ingredient for s in vegan] == ["almond milk"]

        dairy_free = service.find_substitutions("milk", ["vegan", "dairy-free"])
        assert [s.ingredient for s in dairy_free] == ["almond milk", "lactose-free milk"]

    def test_no_substitute_satisfies_restriction(self, service):
        assert service.find_substitutions("milk", ["keto"]) == []

    def test_store_failure_is_reported_as_no_substitutes(self):
        failing_store = MagicMock()
        failing_store.backend_name = "mock"
        failing_store.find_substitution_by_name.side_effect = RuntimeError("connection lost")

        service = SubstitutionService(failing_store)

        assert service.find_substitutions("milk") == []
        failing_store.find_substitution_by_name.assert_called_once_with("milk")


class TestLookupSubstitutions:

    def test_scales_amount_and_keeps_unit(self, service):
        results = service.lookup_substitutions("milk", amount=2, unit="cups")
        assert [r.adjusted_amount for r in results] == [2, 2, 1]
        assert all(r.adjusted_unit == "cups" for r in results)
        assert all(r.original_amount == 2 for r in results)

    def test_without_amount_uses_ratio_and_placeholder_unit(self, service):
        results = service.lookup_substitutions("milk")
        assert [r.adjusted_amount for r in results] == [1, 1, 0.5]
        assert all(r.adjusted_unit == "unit" for r in results)

    def test_zero_amount_counts_as_absent(self, service):
        results = service.lookup_substitutions("milk", amount=0, unit="cups")
        assert results[2].adjusted_amount == 0.5

    def test_restrictions_apply_to_lookup(self, service):
        results = service.lookup_substitutions(
            "Milk", amount=1.5, unit="cups", dietary_restrictions=["vegan"]
        )
        assert len(results) == 1
        assert results[0].ingredient == "almond milk"
        assert results[0].adjusted_amount == 1.5

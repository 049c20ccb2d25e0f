from datetime import datetime, timezone
from unittest.mock import MagicMock, call

import pytest
from bson import ObjectId
from pydantic import ValidationError
from pymongo import TEXT
from pymongo.errors import DuplicateKeyError

from recipe_optimizer.config import Settings
from recipe_optimizer.models.recipe import RecipeCreate, RecipeUpdate
from recipe_optimizer.models.substitution import SubstitutionEntryCreate
from recipe_optimizer.services.mongo_store import MongoRecipeStore
from recipe_optimizer.services.recipe_store import (
    DuplicateSubstitutionError,
    InMemoryRecipeStore,
    build_store,
)


def _payload(title="Pancakes"):
    return RecipeCreate(
        title=title,
        servings=4,
        prep_time=10,
        cook_time=15,
        dietary_tags=["vegetarian"],
        ingredients=[{"name": "flour", "amount": 2, "unit": "cups", "category": "grain"}],
        instructions=["Mix", "Cook"],
        estimated_cost=3.0,
    )


class TestInMemoryRecipeStore:

    def test_create_assigns_id_and_timestamps(self, store):
        saved = store.create_recipe(_payload())

        assert saved.id
        assert saved.created_at is not None
        assert store.find_by_id(saved.id) == saved

    def test_find_all_returns_newest_first(self, store):
        first = store.create_recipe(_payload("First"))
        second = store.create_recipe(_payload("Second"))

        assert [r.id for r in store.find_all()] == [second.id, first.id]

    def test_update_merges_only_given_fields(self, store):
        saved = store.create_recipe(_payload())

        updated = store.update_recipe(saved.id, RecipeUpdate(servings=6))

        assert updated.servings == 6
        assert updated.title == "Pancakes"
        assert updated.dietary_tags == ["vegetarian"]
        assert updated.updated_at >= saved.updated_at

    def test_invalid_update_is_rejected_and_not_stored(self, store):
        saved = store.create_recipe(_payload())

        with pytest.raises(ValidationError):
            store.update_recipe(saved.id, RecipeUpdate(servings=50))

        assert store.find_by_id(saved.id).servings == 4

    def test_missing_recipe_operations_return_none(self, store):
        assert store.find_by_id("nope") is None
        assert store.update_recipe("nope", RecipeUpdate(title="x")) is None
        assert store.delete_recipe("nope") is None

    def test_delete_returns_removed_recipe(self, store):
        saved = store.create_recipe(_payload())

        assert store.delete_recipe(saved.id).id == saved.id
        assert store.find_all() == []

    def test_substitution_names_are_normalized_and_unique(self, store):
        store.add_substitution(SubstitutionEntryCreate(original_ingredient="  Butter ", substitutes=[]))

        assert store.find_substitution_by_name("BUTTER").original_ingredient == "butter"
        with pytest.raises(DuplicateSubstitutionError):
            store.add_substitution(SubstitutionEntryCreate(original_ingredient="butter"))
        assert len(store.list_substitutions()) == 1

    def test_reads_take_the_lock(self, store):
        saved = store.create_recipe(_payload())
        store._lock = MagicMock()

        store.find_all()
        store.find_by_id(saved.id)
        store.find_substitution_by_name("milk")
        store.list_substitutions()

        assert store._lock.__enter__.call_count == 4
        assert store._lock.__exit__.call_count == 4


def test_build_store_defaults_to_memory():
    assert isinstance(build_store(Settings(STORAGE_BACKEND="memory")), InMemoryRecipeStore)


def test_settings_reject_unknown_backend():
    with pytest.raises(ValidationError):
        Settings(STORAGE_BACKEND="sqlite")


class TestMongoRecipeStore:

    @pytest.fixture
    def collections(self):
        return MagicMock(), MagicMock()

    @pytest.fixture
    def mongo_store(self, collections):
        recipes, substitutions = collections
        return MongoRecipeStore(recipes, substitutions)

    @staticmethod
    def _doc(oid):
        now = datetime.now(timezone.utc)
        doc = _payload().model_dump()
        doc.update({"_id": oid, "created_at": now, "updated_at": now})
        return doc

    def test_creates_unique_substitution_index(self, collections, mongo_store):
        collections[1].create_index.assert_called_once_with("original_ingredient", unique=True)

    def test_creates_recipe_indexes(self, collections, mongo_store):
        collections[0].create_index.assert_has_calls([
            call("dietary_tags"),
            call("cuisine"),
            call([("title", TEXT), ("description", TEXT)]),
        ])

    def test_create_recipe_exposes_object_id(self, collections, mongo_store):
        oid = ObjectId()
        collections[0].insert_one.return_value = MagicMock(inserted_id=oid)

        saved = mongo_store.create_recipe(_payload())

        assert saved.id == str(oid)
        inserted = collections[0].insert_one.call_args[0][0]
        assert inserted["title"] == "Pancakes"
        assert "created_at" in inserted

    def test_find_by_id_parses_document(self, collections, mongo_store):
        oid = ObjectId()
        collections[0].find_one.return_value = self._doc(oid)

        recipe = mongo_store.find_by_id(str(oid))

        assert recipe.id == str(oid)
        collections[0].find_one.assert_called_once_with({"_id": oid})

    def test_malformed_id_is_not_found(self, collections, mongo_store):
        assert mongo_store.find_by_id("not-an-object-id") is None
        assert mongo_store.delete_recipe("not-an-object-id") is None
        collections[0].find_one.assert_not_called()

    def test_update_replaces_document(self, collections, mongo_store):
        oid = ObjectId()
        collections[0].find_one.return_value = self._doc(oid)

        updated = mongo_store.update_recipe(str(oid), RecipeUpdate(title="Crepes"))

        assert updated.title == "Crepes"
        query, replacement = collections[0].replace_one.call_args[0]
        assert query == {"_id": oid}
        assert replacement["title"] == "Crepes"
        assert "id" not in replacement

    def test_find_all_sorts_newest_first(self, collections, mongo_store):
        oid = ObjectId()
        collections[0].find.return_value.sort.return_value = [self._doc(oid)]

        recipes = mongo_store.find_all()

        assert [r.id for r in recipes] == [str(oid)]
        collections[0].find.return_value.sort.assert_called_once_with("created_at", -1)

    def test_duplicate_key_becomes_duplicate_substitution(self, collections, mongo_store):
        collections[1].insert_one.side_effect = DuplicateKeyError("dup")

        with pytest.raises(DuplicateSubstitutionError):
            mongo_store.add_substitution(SubstitutionEntryCreate(original_ingredient="milk"))

    def test_substitution_lookup_uses_normalized_name(self, collections, mongo_store):
        collections[1].find_one.return_value = {
            "_id": ObjectId(),
            "original_ingredient": "milk",
            "substitutes": [{"ingredient": "oat milk", "ratio": 1}],
        }

        entry = mongo_store.find_substitution_by_name(" Milk ")

        assert entry.substitutes[0].ingredient == "oat milk"
        collections[1].find_one.assert_called_once_with({"original_ingredient": "milk"})

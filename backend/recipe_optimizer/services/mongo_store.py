"""
MongoDB-backed recipe store.

Documents keep the snake_case field names of the pydantic models and recipes
are indexed on dietary tags, cuisine and title/description text. The
MongoDB ``_id`` (an ObjectId) is exposed as the string ``id``. Id strings
that are not valid ObjectIds behave as "not found".
"""

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, TEXT, MongoClient
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from recipe_optimizer.models.recipe import Recipe, RecipeCreate, RecipeUpdate
from recipe_optimizer.models.substitution import (
    SubstitutionEntry,
    SubstitutionEntryCreate,
)
from recipe_optimizer.services.recipe_store import (
    DuplicateSubstitutionError,
    RecipeStore,
    utc_now,
)
from recipe_optimizer.utils.helpers import normalize_ingredient_key

# Configure logging
logger = logging.getLogger(__name__)


def _to_object_id(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class MongoRecipeStore(RecipeStore):
    """
    Store backed by two MongoDB collections.

    Attributes:
        recipes: Collection of recipe documents
        substitutions: Collection of substitution entries, unique on original_ingredient
    """

    backend_name = "mongo"

    def __init__(self, recipes: Collection, substitutions: Collection):
        self.recipes = recipes
        self.substitutions = substitutions
        self.recipes.create_index("dietary_tags")
        self.recipes.create_index("cuisine")
        self.recipes.create_index([("title", TEXT), ("description", TEXT)])
        self.substitutions.create_index("original_ingredient", unique=True)
        logger.info(
            f"MongoRecipeStore initialized "
            f"(recipes: {recipes.name}, substitutions: {substitutions.name})"
        )

    @classmethod
    def from_settings(cls, settings) -> "MongoRecipeStore":
        """Connect using MONGODB_* settings."""
        client = MongoClient(
            settings.MONGODB_URI,
            serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
        )
        db = client[settings.MONGODB_DB]
        logger.info(f"Connecting to MongoDB database '{settings.MONGODB_DB}'")
        return cls(
            db[settings.MONGODB_RECIPES_COLLECTION],
            db[settings.MONGODB_SUBSTITUTIONS_COLLECTION],
        )

    # ==================== Parsing ====================

    @staticmethod
    def _parse_recipe(doc: Dict[str, Any]) -> Recipe:
        data = dict(doc)
        data["id"] = str(data.pop("_id"))
        try:
            return Recipe.model_validate(data)
        except ValueError as e:
            logger.exception(f"Invalid recipe document: {data.get('id')}")
            raise ValueError(f"Invalid recipe document: {e}") from e

    @staticmethod
    def _parse_substitution(doc: Dict[str, Any]) -> SubstitutionEntry:
        data = dict(doc)
        data["id"] = str(data.pop("_id"))
        try:
            return SubstitutionEntry.model_validate(data)
        except ValueError as e:
            logger.exception(f"Invalid substitution document: {data.get('id')}")
            raise ValueError(f"Invalid substitution document: {e}") from e

    # ==================== Recipes ====================

    def find_all(self) -> List[Recipe]:
        cursor = self.recipes.find({}).sort("created_at", DESCENDING)
        return [self._parse_recipe(doc) for doc in cursor]

    def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        oid = _to_object_id(recipe_id)
        if oid is None:
            return None
        doc = self.recipes.find_one({"_id": oid})
        return self._parse_recipe(doc) if doc else None

    def create_recipe(self, recipe: RecipeCreate) -> Recipe:
        now = utc_now()
        doc = recipe.model_dump()
        doc["created_at"] = now
        doc["updated_at"] = now
        result = self.recipes.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info(f"Created recipe '{recipe.title}' (ID: {result.inserted_id})")
        return self._parse_recipe(doc)

    def update_recipe(self, recipe_id: str, update: RecipeUpdate) -> Optional[Recipe]:
        existing = self.find_by_id(recipe_id)
        if existing is None:
            return None

        updated = self.merge_update(existing, update)
        doc = updated.model_dump(exclude={"id"})
        self.recipes.replace_one({"_id": ObjectId(recipe_id)}, doc)
        logger.info(f"Updated recipe '{updated.title}' (ID: {recipe_id})")
        return updated

    def delete_recipe(self, recipe_id: str) -> Optional[Recipe]:
        oid = _to_object_id(recipe_id)
        if oid is None:
            return None
        doc = self.recipes.find_one_and_delete({"_id": oid})
        if not doc:
            return None
        logger.info(f"Deleted recipe (ID: {recipe_id})")
        return self._parse_recipe(doc)

    # ==================== Substitutions ====================

    def find_substitution_by_name(self, ingredient_name: str) -> Optional[SubstitutionEntry]:
        doc = self.substitutions.find_one(
            {"original_ingredient": normalize_ingredient_key(ingredient_name)}
        )
        return self._parse_substitution(doc) if doc else None

    def add_substitution(self, entry: SubstitutionEntryCreate) -> SubstitutionEntry:
        now = utc_now()
        doc = entry.model_dump()
        doc["created_at"] = now
        doc["updated_at"] = now
        try:
            result = self.substitutions.insert_one(doc)
        except DuplicateKeyError as e:
            raise DuplicateSubstitutionError(
                f"Substitutions for '{entry.original_ingredient}' already exist"
            ) from e
        doc["_id"] = result.inserted_id
        logger.info(
            f"Added {len(entry.substitutes)} substitute(s) for "
            f"'{entry.original_ingredient}'"
        )
        return self._parse_substitution(doc)

    def list_substitutions(self) -> List[SubstitutionEntry]:
        return [self._parse_substitution(doc) for doc in self.substitutions.find({})]

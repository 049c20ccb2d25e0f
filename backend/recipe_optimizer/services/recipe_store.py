"""
Recipe and substitution storage.

The optimizer never talks to a database directly: every service receives a
``RecipeStore`` instance. Two backends are provided:

- ``InMemoryRecipeStore``: process-local dictionaries (default; data is
  lost on restart)
- ``MongoRecipeStore`` (see mongo_store.py): MongoDB collections

``build_store`` picks one from the application settings.
"""

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional

from recipe_optimizer.models.recipe import Recipe, RecipeCreate, RecipeUpdate
from recipe_optimizer.models.substitution import (
    SubstitutionEntry,
    SubstitutionEntryCreate,
)
from recipe_optimizer.utils.helpers import normalize_ingredient_key

# Configure logging
logger = logging.getLogger(__name__)


class DuplicateSubstitutionError(ValueError):
    """Raised when a substitution entry already exists for an ingredient."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecipeStore(ABC):
    """
    Storage contract used by the optimizer and the catalog endpoints.

    Lookups return None when nothing is found; they never raise for a
    missing or malformed id.
    """

    backend_name = "abstract"

    @abstractmethod
    def find_all(self) -> List[Recipe]:
        """All recipes, newest first."""

    @abstractmethod
    def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        """One recipe, or None."""

    @abstractmethod
    def create_recipe(self, recipe: RecipeCreate) -> Recipe:
        """Store a new recipe and return it with id and timestamps."""

    @abstractmethod
    def update_recipe(self, recipe_id: str, update: RecipeUpdate) -> Optional[Recipe]:
        """Apply a partial update; None if the recipe does not exist."""

    @abstractmethod
    def delete_recipe(self, recipe_id: str) -> Optional[Recipe]:
        """Delete a recipe and return it; None if it did not exist."""

    @abstractmethod
    def find_substitution_by_name(self, ingredient_name: str) -> Optional[SubstitutionEntry]:
        """Entry whose original_ingredient equals the normalized name, or None."""

    @abstractmethod
    def add_substitution(self, entry: SubstitutionEntryCreate) -> SubstitutionEntry:
        """Register substitutes; raises DuplicateSubstitutionError on a taken name."""

    @abstractmethod
    def list_substitutions(self) -> List[SubstitutionEntry]:
        """All registered substitution entries."""

    @staticmethod
    def merge_update(existing: Recipe, update: RecipeUpdate) -> Recipe:
        """
        Apply the fields set in ``update`` and validate the result.

        Raises:
            pydantic.ValidationError: If the merged recipe is invalid
        """
        merged = existing.model_dump()
        merged.update(update.model_dump(exclude_unset=True))
        merged["updated_at"] = utc_now()
        return Recipe.model_validate(merged)


class InMemoryRecipeStore(RecipeStore):
    """
    Dictionary-backed store.

    Recipes are kept in insertion order; ``find_all`` returns them newest
    first. A lock guards reads and writes since FastAPI may call into the
    store from worker threads.
    """

    backend_name = "memory"

    def __init__(self):
        self._recipes: Dict[str, Recipe] = {}
        self._substitutions: Dict[str, SubstitutionEntry] = {}
        self._lock = threading.Lock()
        logger.info("InMemoryRecipeStore initialized")

    def find_all(self) -> List[Recipe]:
        with self._lock:
            recipes = list(self._recipes.values())
        return list(reversed(recipes))

    def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        with self._lock:
            return self._recipes.get(recipe_id)

    def create_recipe(self, recipe: RecipeCreate) -> Recipe:
        now = utc_now()
        stored = Recipe(
            **recipe.model_dump(),
            id=uuid.uuid4().hex,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._recipes[stored.id] = stored
        logger.info(f"Created recipe '{stored.title}' (ID: {stored.id})")
        return stored

    def update_recipe(self, recipe_id: str, update: RecipeUpdate) -> Optional[Recipe]:
        with self._lock:
            existing = self._recipes.get(recipe_id)
            if existing is None:
                return None
            updated = self.merge_update(existing, update)
            self._recipes[recipe_id] = updated
        logger.info(f"Updated recipe '{updated.title}' (ID: {recipe_id})")
        return updated

    def delete_recipe(self, recipe_id: str) -> Optional[Recipe]:
        with self._lock:
            removed = self._recipes.pop(recipe_id, None)
        if removed is not None:
            logger.info(f"Deleted recipe '{removed.title}' (ID: {recipe_id})")
        return removed

    def find_substitution_by_name(self, ingredient_name: str) -> Optional[SubstitutionEntry]:
        with self._lock:
            return self._substitutions.get(normalize_ingredient_key(ingredient_name))

    def add_substitution(self, entry: SubstitutionEntryCreate) -> SubstitutionEntry:
        now = utc_now()
        with self._lock:
            if entry.original_ingredient in self._substitutions:
                raise DuplicateSubstitutionError(
                    f"Substitutions for '{entry.original_ingredient}' already exist"
                )
            stored = SubstitutionEntry(
                **entry.model_dump(),
                id=uuid.uuid4().hex,
                created_at=now,
                updated_at=now,
            )
            self._substitutions[stored.original_ingredient] = stored
        logger.info(
            f"Added {len(stored.substitutes)} substitute(s) for "
            f"'{stored.original_ingredient}'"
        )
        return stored

    def list_substitutions(self) -> List[SubstitutionEntry]:
        with self._lock:
            return list(self._substitutions.values())

    def clear(self) -> None:
        """Remove every recipe and substitution entry."""
        with self._lock:
            self._recipes.clear()
            self._substitutions.clear()


def build_store(settings) -> RecipeStore:
    """
    Create the store selected by ``settings.STORAGE_BACKEND``.

    Args:
        settings: Application Settings

    Returns:
        RecipeStore: In-memory or MongoDB-backed store
    """
    if settings.STORAGE_BACKEND == "mongo":
        from recipe_optimizer.services.mongo_store import MongoRecipeStore

        return MongoRecipeStore.from_settings(settings)

    logger.info("Using in-memory storage (data is lost on restart)")
    return InMemoryRecipeStore()

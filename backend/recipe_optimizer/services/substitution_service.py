"""
Ingredient substitution lookup.

This module resolves registered substitutes for an ingredient:

1. The ingredient name is normalized (trimmed, lower-cased) and looked up
   exactly (no substring matching) in the substitution catalog.
2. Substitutes are filtered by dietary benefit: with restrictions given, a
   substitute is kept when it shares at least one tag with them.
3. Each substitute's quantity is adjusted by its conversion ratio.

Storage failures during a lookup are logged and reported as "no
substitutes", so one failing lookup cannot abort a larger computation.
"""

import logging
from typing import List, Optional, Sequence

from recipe_optimizer.models.substitution import Substitute, SubstituteResult
from recipe_optimizer.services.recipe_store import RecipeStore
from recipe_optimizer.utils.constants import PLACEHOLDER_UNIT
from recipe_optimizer.utils.helpers import normalize_ingredient_key

# Configure logging
logger = logging.getLogger(__name__)


class SubstitutionService:
    """
    Resolves substitutes for ingredients from the substitution catalog.

    Attributes:
        store: Storage backend holding substitution entries
    """

    def __init__(self, store: RecipeStore):
        """
        Initialize the substitution service.

        Args:
            store: Recipe store used for substitution lookups
        """
        self.store = store
        logger.info(f"SubstitutionService initialized (storage: {store.backend_name})")

    def find_substitutions(
        self,
        ingredient_name: str,
        dietary_restrictions: Optional[Sequence[str]] = None
    ) -> List[SubstituteResult]:
        """
        Registered substitutes of an ingredient, filtered by dietary benefit.

        ``adjusted_amount`` is the bare conversion ratio; scaling to a
        concrete quantity is left to the caller.

        Args:
            ingredient_name: Ingredient to replace (case-insensitive)
            dietary_restrictions: Tags a substitute should help satisfy

        Returns:
            List[SubstituteResult]: Substitutes in catalog order; empty when
                                    none are registered or the lookup failed
        """
        key = normalize_ingredient_key(ingredient_name)

        try:
            entry = self.store.find_substitution_by_name(key)
        except Exception as e:
            logger.error(f"Error finding substitutions for '{key}': {str(e)}", exc_info=True)
            return []

        if entry is None:
            logger.debug(f"No substitution entry for '{key}'")
            return []

        substitutes = [
            sub for sub in entry.substitutes
            if self._has_dietary_benefit(sub, dietary_restrictions)
        ]

        logger.info(
            f"Found {len(substitutes)} of {len(entry.substitutes)} substitute(s) "
            f"for '{key}' (restrictions: {list(dietary_restrictions or [])})"
        )

        return [
            SubstituteResult(**sub.model_dump(), adjusted_amount=sub.ratio)
            for sub in substitutes
        ]

    def lookup_substitutions(
        self,
        ingredient_name: str,
        amount: Optional[float] = None,
        unit: Optional[str] = None,
        dietary_restrictions: Optional[Sequence[str]] = None
    ) -> List[SubstituteResult]:
        """
        Substitutes scaled to a requested quantity.

        ``adjusted_amount`` is ``amount * ratio`` when an amount is given
        (0 counts as not given), otherwise the ratio itself. The unit is
        the requested one, or a generic placeholder.

        Example:
            service.lookup_substitutions("milk", amount=2, unit="cups",
                                         dietary_restrictions=["vegan"])
        """
        substitutes = self.find_substitutions(ingredient_name, dietary_restrictions)

        return [
            sub.model_copy(update={
                "adjusted_amount": amount * sub.ratio if amount else sub.ratio,
                "adjusted_unit": unit or PLACEHOLDER_UNIT,
                "original_amount": amount,
                "original_unit": unit,
            })
            for sub in substitutes
        ]

    @staticmethod
    def _has_dietary_benefit(
        substitute: Substitute,
        dietary_restrictions: Optional[Sequence[str]]
    ) -> bool:
        if not dietary_restrictions:
            return True
        return any(
            restriction in substitute.dietary_benefits
            for restriction in dietary_restrictions
        )

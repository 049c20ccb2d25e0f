"""
Shared pydantic base model.

Python attributes are snake_case; the JSON API speaks camelCase
(``isOptional``, ``dietaryTags``, ``estimatedCost``...). Both spellings are
accepted on input, and FastAPI serializes responses by alias.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases and population by field name."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

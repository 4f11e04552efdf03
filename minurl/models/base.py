"""
Base Pydantic models for minurl.

Provides common model configurations used across the package.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FrozenCamelModel(BaseModel):
    """Immutable base model accepting camelCase aliases alongside field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

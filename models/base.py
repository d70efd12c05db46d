"""
Base model classes.
"""

from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict


class CreatedAtMixin(BaseModel):
    """Mixin for a creation timestamp that is set once."""
    created_at: datetime = Field(default_factory=datetime.now)


class BaseRecord(CreatedAtMixin):
    """
    Base for all persistent records.

    Records are immutable once built. Changes produce a new copy that
    replaces the stored one wholesale.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",  # Ignore unknown fields from older stores
        str_strip_whitespace=True,
    )

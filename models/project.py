"""
ProjectRecord - the registry's root record.
"""

from enum import IntEnum
from typing import Optional
from pydantic import Field, PositiveInt, field_validator

from .base import BaseRecord


class AccessLevel(IntEnum):
    """
    Visibility of a project, ordered by increasing restriction.

    Stored as the integer tag.
    """
    PUBLIC = 0
    INSTITUTION = 1
    RESTRICTED = 1  # Older name for INSTITUTION
    PRIVATE = 2

    @classmethod
    def parse(cls, value) -> "AccessLevel":
        """Accept a tag, a member, or a member name ("public", "Restricted", ...)."""
        if isinstance(value, str) and not value.strip().lstrip("-").isdigit():
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown access level: {value}") from None
        return cls(int(value))

    @property
    def label(self) -> str:
        return self.name.capitalize()


class ProjectRecord(BaseRecord):
    """
    A published research project.

    This is THE record definition. Each entry of the store maps directly to this.
    """

    # Identity
    id: PositiveInt
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)

    # Affiliation, resolved once at creation
    department_id: int
    institution_id: int
    year: int

    access_level: AccessLevel
    artifact_hash: str = Field(min_length=1)

    # Authorship
    authors: list[str] = Field(min_length=1)
    creator_identity: str = Field(min_length=1)

    # Enrichment
    summary: Optional[str] = None

    @field_validator("authors")
    @classmethod
    def _no_blank_authors(cls, authors: list[str]) -> list[str]:
        if any(not a for a in authors):
            raise ValueError("authors must not contain empty identities")
        return authors

    def is_authored_by(self, identity: Optional[str]) -> bool:
        """Exact, case-sensitive authorship check."""
        return identity is not None and identity in self.authors

    def with_summary(self, summary: Optional[str]) -> "ProjectRecord":
        """Copy of this record carrying the given summary."""
        return self.model_copy(update={"summary": summary})

    def with_access_level(self, level: AccessLevel) -> "ProjectRecord":
        """Copy of this record at a new access level."""
        return self.model_copy(update={"access_level": AccessLevel(level)})

"""
Domain models - single source of truth for all records.

Design principles:
- Every record defined once
- Validation at the boundary
- Backend-agnostic (the store handles persistence)
"""

from .base import BaseRecord, CreatedAtMixin
from .project import AccessLevel, ProjectRecord
from .directory import Affiliation, Institution, Department, Participant

__all__ = [
    # Base
    "BaseRecord",
    "CreatedAtMixin",
    # Project
    "AccessLevel",
    "ProjectRecord",
    # Directory
    "Affiliation",
    "Institution",
    "Department",
    "Participant",
]

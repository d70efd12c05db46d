"""
Registry exceptions.

Store errors are fatal to the operation that raised them and always reach the
caller. Enrichment and directory errors are recovered inside the service.
"""

from typing import Optional


class RegistryError(Exception):
    """Base for all registry errors."""


class ProjectNotFound(RegistryError):
    """No record with this id, or the viewer may not see it."""

    def __init__(self, project_id: int):
        self.project_id = project_id
        super().__init__(f"Project {project_id} not found")


class StoreError(RegistryError):
    """The record store could not be read or written."""


class StoreUnavailableError(StoreError):
    """Storage backend I/O failed."""


class StoreCorruptError(StoreError):
    """Persisted state exists but cannot be parsed or validated."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        super().__init__(f"{message} ({source})" if source else message)


class EnrichmentError(RegistryError):
    """The summarizer failed to produce a summary."""


class DirectoryUnavailable(RegistryError):
    """The directory transport could not be reached."""

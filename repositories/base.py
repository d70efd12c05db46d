"""
Storage backend base class - defines the interface.

A backend persists one state document for the whole store:

    {"version": 1, "high_water": <int>, "projects": [<record>, ...]}

It knows nothing about records. Validation happens in the store.
"""

from abc import ABC, abstractmethod
from typing import Optional

STATE_VERSION = 1


class StorageBackend(ABC):
    """Abstract durable storage for the record store."""

    @abstractmethod
    def load(self) -> Optional[dict]:
        """Return the stored state, or None if nothing was ever saved."""
        pass

    @abstractmethod
    def save(self, state: dict) -> None:
        """Persist the full state. Must be durable when this returns."""
        pass

    def describe(self) -> str:
        """Short human-readable location, used in log lines."""
        return type(self).__name__

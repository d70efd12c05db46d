"""
In-memory backend - for tests and throwaway runs.
"""

import copy
from typing import Optional

from .base import StorageBackend


class MemoryBackend(StorageBackend):
    """Keeps a deep copy of the last saved state."""

    def __init__(self, state: Optional[dict] = None):
        self._state = copy.deepcopy(state)
        self.save_count = 0

    def load(self) -> Optional[dict]:
        return copy.deepcopy(self._state)

    def save(self, state: dict) -> None:
        self._state = copy.deepcopy(state)
        self.save_count += 1

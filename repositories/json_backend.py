"""
JSON file backend - stores the whole collection in one JSON document.

Writes go to a temp file that replaces the target, so a crash mid-write
leaves the previous state intact.
"""

import json
import os
import threading
from pathlib import Path
from typing import Optional

from config import STORE_FILE
from errors import StoreCorruptError, StoreUnavailableError
from .base import StorageBackend


class WriteQueue:
    """Thread-safe write serialization."""

    def __init__(self):
        self._lock = threading.Lock()

    def write_json(self, path: Path, data: dict) -> None:
        """Atomic JSON write."""
        with self._lock:
            temp = path.with_suffix(path.suffix + ".tmp")
            with open(temp, "w") as f:
                json.dump(data, f, indent=2, default=str)
                f.flush()
                os.fsync(f.fileno())
            temp.replace(path)


_write_queue = WriteQueue()


class JsonFileBackend(StorageBackend):
    """JSON file implementation of the storage backend."""

    def __init__(self, path: Path = None):
        self.path = Path(path or STORE_FILE)

    def describe(self) -> str:
        return str(self.path)

    def load(self) -> Optional[dict]:
        if not self.path.exists():
            return None

        try:
            with open(self.path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StoreCorruptError(f"Invalid JSON: {e}", source=str(self.path)) from e
        except OSError as e:
            raise StoreUnavailableError(f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("projects"), list):
            raise StoreCorruptError("Missing 'projects' list", source=str(self.path))

        return data

    def save(self, state: dict) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            _write_queue.write_json(self.path, state)
        except OSError as e:
            raise StoreUnavailableError(f"Cannot write {self.path}: {e}") from e

"""
Repository layer - abstracts persistence.

Usage:
    from repositories import create_store

    store = create_store()              # Configured backend
    store = create_store("memory")      # Throwaway store
    store.insert(record)

Backends are swappable via config. The store is an ordinary object: build
one and hand it to whatever needs it.
"""

from pathlib import Path
from typing import Iterable, Optional

from config import STORE_BACKEND
from models import ProjectRecord
from .base import StorageBackend
from .json_backend import JsonFileBackend
from .memory_backend import MemoryBackend
from .seed import load_seed_records
from .store import RecordStore


def create_backend(backend: str = None, path: Path = None) -> StorageBackend:
    """Build a storage backend by name."""
    backend = backend or STORE_BACKEND
    if backend == "json":
        return JsonFileBackend(path)
    elif backend == "memory":
        return MemoryBackend()
    # Add more backends here:
    # elif backend == "sqlite":
    #     return SqliteBackend(path)
    else:
        raise ValueError(f"Unknown backend: {backend}")


def create_store(
    backend: str = None,
    path: Path = None,
    seed: Optional[Iterable[ProjectRecord]] = None,
) -> RecordStore:
    """Build a record store. Seed defaults to the bundled seed file."""
    if seed is None:
        seed = load_seed_records()
    return RecordStore(create_backend(backend, path), seed=seed)


__all__ = [
    "create_store",
    "create_backend",
    "load_seed_records",
    "RecordStore",
    "StorageBackend",
    "JsonFileBackend",
    "MemoryBackend",
]

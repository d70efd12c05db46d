"""
RecordStore - the authoritative, ordered collection of project records.

Lifecycle: load from the backend at construction, initialise from seed
records if the backend is empty, flush the full state on every mutation.

Every public method holds the store lock, so id reservation, inserts and
replacements never interleave and readers never see a half-applied change.
The in-memory collection only changes after the backend write succeeded.
"""

import threading
from typing import Callable, Iterable, Optional

from pydantic import ValidationError

from errors import StoreCorruptError
from logging_config import get_logger
from models import ProjectRecord
from .base import StorageBackend, STATE_VERSION

logger = get_logger(__name__)


class RecordStore:
    """Ordered record collection with monotonic id assignment."""

    def __init__(self, backend: StorageBackend, seed: Iterable[ProjectRecord] = None):
        self._backend = backend
        self._lock = threading.RLock()
        self._records: list[ProjectRecord] = []
        self._high_water = 0

        state = backend.load()
        if state is None:
            records = list(seed or [])
            high_water = max((r.id for r in records), default=0)
            self._commit(records, high_water)
            logger.info("[STORE] Initialised %s with %d seed records", backend.describe(), len(records))
        else:
            self._records, self._high_water = self._decode(state)
            logger.info("[STORE] Loaded %d records from %s", len(self._records), backend.describe())

    # === Persistence ===

    def _decode(self, state: dict) -> tuple[list[ProjectRecord], int]:
        source = self._backend.describe()
        try:
            records = [ProjectRecord.model_validate(item) for item in state.get("projects", [])]
        except ValidationError as e:
            raise StoreCorruptError(f"Invalid project record: {e}", source=source) from e

        try:
            stored_high_water = int(state.get("high_water", 0))
        except (TypeError, ValueError) as e:
            raise StoreCorruptError(f"Invalid high_water: {state.get('high_water')!r}", source=source) from e

        return records, max(stored_high_water, max((r.id for r in records), default=0))

    def _commit(self, records: list[ProjectRecord], high_water: int) -> None:
        """Write the new state, then adopt it. Backend errors propagate."""
        state = {
            "version": STATE_VERSION,
            "high_water": high_water,
            "projects": [r.model_dump(mode="json") for r in records],
        }
        self._backend.save(state)
        self._records = records
        self._high_water = high_water

    # === Operations ===

    def insert(self, record: ProjectRecord) -> None:
        """Add a record at the front of the collection (newest first)."""
        with self._lock:
            self._commit([record] + self._records, max(self._high_water, record.id))
            logger.debug("[STORE] Inserted project %d", record.id)

    def list_all(self) -> list[ProjectRecord]:
        """Every record, newest first. No filtering."""
        with self._lock:
            return list(self._records)

    def get(self, project_id: int) -> Optional[ProjectRecord]:
        with self._lock:
            for record in self._records:
                if record.id == project_id:
                    return record
            return None

    def replace(self, record: ProjectRecord) -> bool:
        """
        Substitute the record with the same id.

        Returns False, without writing anything, if no record has that id.
        """
        with self._lock:
            for i, existing in enumerate(self._records):
                if existing.id == record.id:
                    records = list(self._records)
                    records[i] = record
                    self._commit(records, self._high_water)
                    logger.debug("[STORE] Replaced project %d", record.id)
                    return True
            return False

    def modify(self, project_id: int, change: Callable[[ProjectRecord], ProjectRecord]) -> Optional[ProjectRecord]:
        """
        Read, change and replace one record under the store lock.

        `change` gets the current record and returns its replacement; if it
        raises, nothing is written. Returns None when no record has that id.
        """
        with self._lock:
            current = self.get(project_id)
            if current is None:
                return None
            updated = change(current)
            if updated.id != project_id:
                raise ValueError(f"Change moved project {project_id} to id {updated.id}")
            self.replace(updated)
            return updated

    def next_id(self) -> int:
        """One more than the highest id present or ever handed out; 1 when empty."""
        with self._lock:
            return self._high_water + 1

    def reserve_id(self) -> int:
        """Hand out next_id() and persist it so it is never handed out again."""
        with self._lock:
            project_id = self._high_water + 1
            self._commit(self._records, project_id)
            return project_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

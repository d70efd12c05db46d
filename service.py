"""
ProjectService - create, publish and read projects with access control.

Writes: reserve id -> resolve affiliation -> build record -> enrich -> insert.
Reads: load from store -> resolve viewer affiliation -> filter with can_view.

The service performs no authorization of its own on update_project or
list_all_unfiltered. Callers must gate those.
"""

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from datetime import datetime
import threading
from typing import Optional

import config
from access import can_view, filter_visible
from directory import Directory
from errors import DirectoryUnavailable, EnrichmentError, ProjectNotFound
from fixtures import fabricate_identity, generate_mock_artifact_hash
from logging_config import get_logger
from models import AccessLevel, Affiliation, ProjectRecord
from repositories import RecordStore
from summarizer import Summarizer

logger = get_logger(__name__)


class ProjectService:
    """Orchestrates the record store, directory and summarizer."""

    def __init__(
        self,
        store: RecordStore,
        directory: Directory,
        summarizer: Optional[Summarizer] = None,
        *,
        default_institution_id: int = None,
        summary_timeout: float = None,
        summary_workers: int = None,
    ):
        self.store = store
        self.directory = directory
        self.summarizer = summarizer
        self.default_institution_id = (
            config.DEFAULT_INSTITUTION_ID if default_institution_id is None else default_institution_id
        )
        self.summary_timeout = config.SUMMARY_TIMEOUT if summary_timeout is None else summary_timeout
        self.summary_workers = config.SUMMARY_WORKERS if summary_workers is None else summary_workers
        self._enrich_pool = ThreadPoolExecutor(max_workers=self.summary_workers, thread_name_prefix="enrich")
        # Timed-out summaries still occupying a worker
        self._stuck: set = set()
        self._stuck_lock = threading.Lock()

    def close(self) -> None:
        """Stop the enrichment pool without waiting for stragglers."""
        self._enrich_pool.shutdown(wait=False, cancel_futures=True)

    # === Directory ===

    def resolve_affiliation(self, identity: Optional[str]) -> Optional[Affiliation]:
        """Directory lookup. An unreachable directory counts as unresolved."""
        if not identity:
            return None
        try:
            return self.directory.resolve(identity)
        except DirectoryUnavailable as e:
            logger.warning("[DIRECTORY] Lookup failed for %s, treating as unresolved: %s", identity, e)
            return None

    # === Writes ===

    def create_project(
        self,
        title: str,
        description: str,
        department_id: int,
        year: int,
        access_level: AccessLevel,
        artifact_hash: Optional[str] = None,
        author_identity: Optional[str] = None,
    ) -> ProjectRecord:
        """
        Build a new record with a freshly reserved id.

        The record is NOT stored; pass it to add_project(). Without an
        author_identity a placeholder identity is fabricated, and without an
        artifact_hash a placeholder hash; both are demo affordances only.
        """
        author = author_identity or fabricate_identity()
        project_id = self.store.reserve_id()

        affiliation = self.resolve_affiliation(author)
        if affiliation:
            institution_id, dept_id = affiliation.institution_id, affiliation.department_id
        else:
            institution_id, dept_id = self.default_institution_id, department_id

        return ProjectRecord(
            id=project_id,
            title=title,
            description=description,
            department_id=dept_id,
            institution_id=institution_id,
            year=year,
            access_level=AccessLevel.parse(access_level),
            artifact_hash=artifact_hash or generate_mock_artifact_hash(),
            authors=[author],
            creator_identity=author,
            created_at=datetime.now(),
        )

    def _enrich(self, record: ProjectRecord) -> ProjectRecord:
        """Attach a summary if one arrives in time. Never raises."""
        if record.summary or self.summarizer is None:
            return record

        with self._stuck_lock:
            if len(self._stuck) >= self.summary_workers:
                logger.warning(
                    "[ENRICH] All %d enrichment workers busy, storing project %d without summary",
                    self.summary_workers, record.id,
                )
                return record
        future = self._enrich_pool.submit(self.summarizer.summarize, record)

        try:
            summary = future.result(timeout=self.summary_timeout)
        except FutureTimeout:
            if not future.cancel():
                with self._stuck_lock:
                    self._stuck.add(future)
                future.add_done_callback(self._release_stuck)
            logger.warning(
                "[ENRICH] Summary for project %d timed out after %.1fs (%d of %d workers stuck)",
                record.id, self.summary_timeout, len(self._stuck), self.summary_workers,
            )
            return record
        except EnrichmentError as e:
            logger.warning("[ENRICH] Summary for project %d failed: %s", record.id, e)
            return record
        except Exception:
            logger.exception("[ENRICH] Summarizer crashed on project %d", record.id)
            return record

        return record.with_summary(summary) if summary else record

    def _release_stuck(self, future) -> None:
        with self._stuck_lock:
            self._stuck.discard(future)

    def add_project(self, record: ProjectRecord) -> ProjectRecord:
        """
        Enrich (best effort) and store a record.

        Returns the record as stored. Store errors propagate.
        """
        record = self._enrich(record)
        self.store.insert(record)
        logger.info("[SERVICE] Added project %d (%s)", record.id, record.access_level.label)
        return record

    def publish(
        self,
        title: str,
        description: str,
        department_id: int,
        year: int,
        access_level: AccessLevel,
        artifact_hash: Optional[str] = None,
        author_identity: Optional[str] = None,
    ) -> ProjectRecord:
        """create_project() followed by add_project()."""
        record = self.create_project(
            title, description, department_id, year, access_level,
            artifact_hash=artifact_hash, author_identity=author_identity,
        )
        return self.add_project(record)

    def update_project(self, record: ProjectRecord) -> bool:
        """
        Replace the stored record with the same id.

        No access check. Returns False and leaves the store untouched when
        no record has that id.
        """
        replaced = self.store.replace(record)
        if not replaced:
            logger.warning("[SERVICE] Update ignored, no project %d", record.id)
        return replaced

    def set_access_level(self, project_id: int, level: AccessLevel, actor: Optional[str]) -> ProjectRecord:
        """
        Change a project's access level. Only its authors may do this.

        Raises ProjectNotFound for missing ids and for non-authors alike.
        """
        level = AccessLevel.parse(level)
        previous = []

        def change(record: ProjectRecord) -> ProjectRecord:
            if not record.is_authored_by(actor):
                raise ProjectNotFound(project_id)
            previous.append(record.access_level)
            return record.with_access_level(level)

        updated = self.store.modify(project_id, change)
        if updated is None:
            raise ProjectNotFound(project_id)

        logger.info(
            "[SERVICE] Project %d access %s -> %s",
            project_id, previous[0].label, updated.access_level.label,
        )
        return updated

    # === Reads ===

    def list_visible(
        self,
        viewer_identity: Optional[str] = None,
        *,
        department_id: Optional[int] = None,
        year: Optional[int] = None,
        author: Optional[str] = None,
    ) -> list[ProjectRecord]:
        """Records the viewer may see, newest first, optionally narrowed."""
        records = filter_visible(
            self.store.list_all(),
            viewer_identity,
            self.resolve_affiliation(viewer_identity),
        )
        if department_id is not None:
            records = [r for r in records if r.department_id == department_id]
        if year is not None:
            records = [r for r in records if r.year == year]
        if author is not None:
            records = [r for r in records if r.is_authored_by(author)]
        return records

    def list_all_unfiltered(self) -> list[ProjectRecord]:
        """Every record. Administrative bypass: gate before exposing."""
        return self.store.list_all()

    def get_visible(self, project_id: int, viewer_identity: Optional[str] = None) -> ProjectRecord:
        """
        The record with this id if the viewer may see it.

        Raises ProjectNotFound both when it does not exist and when it is
        hidden from the viewer.
        """
        record = self.store.get(project_id)
        if record is None:
            raise ProjectNotFound(project_id)
        if not can_view(record, viewer_identity, self.resolve_affiliation(viewer_identity)):
            raise ProjectNotFound(project_id)
        return record

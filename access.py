"""
Access engine - decides whether a viewer may see a project.

Rules, first match wins:
1. Public projects are visible to everyone, anonymous viewers included.
2. Authors always see their own projects, whatever the level.
3. Institution projects are visible to members of the same institution.
4. Everything else is hidden.

Pure functions only: no I/O, no clock, no randomness. Called once per
record per listing.
"""

from typing import Iterable, Optional

from models import AccessLevel, Affiliation, ProjectRecord


def can_view(
    record: ProjectRecord,
    viewer_identity: Optional[str],
    viewer_affiliation: Optional[Affiliation],
) -> bool:
    """Return True if the viewer may see the record."""
    if record.access_level == AccessLevel.PUBLIC:
        return True

    # Rules 2 and 3 need a concrete identity
    if not viewer_identity:
        return False

    if record.is_authored_by(viewer_identity):
        return True

    if (
        record.access_level == AccessLevel.INSTITUTION
        and viewer_affiliation is not None
        and viewer_affiliation.institution_id == record.institution_id
    ):
        return True

    return False


def filter_visible(
    records: Iterable[ProjectRecord],
    viewer_identity: Optional[str],
    viewer_affiliation: Optional[Affiliation],
) -> list[ProjectRecord]:
    """Records the viewer may see, in their original order."""
    return [r for r in records if can_view(r, viewer_identity, viewer_affiliation)]

"""
Seed data - records an empty store starts with.
"""

from datetime import datetime, timedelta
from pathlib import Path

from config import SEED_FILE, load_yaml
from models import ProjectRecord


def load_seed_records(path: Path = None, now: datetime = None) -> list[ProjectRecord]:
    """
    Build seed records from YAML, newest first.

    Entries give `created_days_ago` instead of an absolute timestamp and may
    omit `creator_identity`, which then defaults to the first author.
    """
    data = load_yaml(path or SEED_FILE)
    if not data:
        return []

    now = now or datetime.now()
    records = []
    for entry in data.get("projects", []):
        entry = dict(entry)
        days_ago = entry.pop("created_days_ago", 0)
        entry.setdefault("created_at", now - timedelta(days=days_ago))
        entry.setdefault("creator_identity", entry["authors"][0])
        records.append(ProjectRecord.model_validate(entry))

    return sorted(records, key=lambda r: r.created_at, reverse=True)

"""
Shared helpers for API routes.
"""

from typing import Optional

from flask import current_app, request

import config
from models import ProjectRecord


def get_service():
    """The ProjectService bound to the running app."""
    return current_app.extensions["registry"]


def viewer_identity() -> Optional[str]:
    """
    Viewer identity set by the upstream authenticator.

    The header is trusted as-is; this layer does no authentication.
    """
    identity = request.headers.get(config.VIEWER_HEADER, "").strip()
    return identity or None


def is_admin(identity: Optional[str]) -> bool:
    return identity is not None and identity in current_app.config["REGISTRY_ADMINS"]


def project_json(record: ProjectRecord) -> dict:
    """Record as JSON plus display fields."""
    directory = get_service().directory
    data = record.model_dump(mode="json")
    data["access_label"] = record.access_level.label
    data["institution_name"] = directory.institution_name(record.institution_id)
    data["department_name"] = directory.department_name(record.department_id)
    return data


def int_arg(name: str) -> Optional[int]:
    """Optional integer query parameter. Raises ValueError if malformed."""
    value = request.args.get(name)
    if value is None or value == "":
        return None
    return int(value)

"""
Project API routes.

Hidden and missing projects both answer 404, so callers cannot probe for
projects they are not allowed to see.
"""

from flask import jsonify, request
from pydantic import ValidationError

from errors import ProjectNotFound
from logging_config import get_logger
from models import AccessLevel, ProjectRecord
from . import projects_bp
from .helpers import get_service, viewer_identity, is_admin, project_json, int_arg

logger = get_logger(__name__)


@projects_bp.errorhandler(ProjectNotFound)
def not_found(e):
    return jsonify({"error": "Not found"}), 404


@projects_bp.errorhandler(ValidationError)
def invalid(e):
    return jsonify({"error": "Invalid project", "details": e.errors(include_url=False, include_context=False, include_input=False)}), 400


@projects_bp.route("/api/projects")
def list_projects():
    """List projects visible to the viewer."""
    try:
        department_id = int_arg("department")
        year = int_arg("year")
    except ValueError:
        return jsonify({"error": "department and year must be integers"}), 400

    records = get_service().list_visible(
        viewer_identity(),
        department_id=department_id,
        year=year,
        author=request.args.get("author") or None,
    )
    return jsonify([project_json(r) for r in records])


@projects_bp.route("/api/projects/<int:project_id>")
def get_project(project_id):
    """Get a single project if the viewer may see it."""
    record = get_service().get_visible(project_id, viewer_identity())
    return jsonify(project_json(record))


@projects_bp.route("/api/projects", methods=["POST"])
def create_project():
    """Create and publish a project authored by the viewer."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    missing = [k for k in ("title", "description", "department_id", "year") if k not in data]
    if missing:
        return jsonify({"error": f"Missing fields: {', '.join(missing)}"}), 400

    try:
        access_level = AccessLevel.parse(data.get("access_level", AccessLevel.PUBLIC))
        department_id = int(data["department_id"])
        year = int(data["year"])
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400

    record = get_service().publish(
        title=data["title"],
        description=data["description"],
        department_id=department_id,
        year=year,
        access_level=access_level,
        artifact_hash=data.get("artifact_hash") or None,
        author_identity=viewer_identity(),
    )
    return jsonify(project_json(record)), 201


@projects_bp.route("/api/projects/<int:project_id>", methods=["PUT"])
def update_project(project_id):
    """Replace a project. Only its authors may do this."""
    service = get_service()
    current = service.get_visible(project_id, viewer_identity())
    if not current.is_authored_by(viewer_identity()):
        raise ProjectNotFound(project_id)

    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400
    # Identity, creation time, creator and affiliation are fixed
    data.update(
        id=current.id,
        created_at=current.created_at,
        creator_identity=current.creator_identity,
        institution_id=current.institution_id,
        department_id=current.department_id,
    )
    record = ProjectRecord.model_validate(data)

    if not service.update_project(record):
        raise ProjectNotFound(project_id)
    return jsonify(project_json(record))


@projects_bp.route("/api/projects/<int:project_id>/access", methods=["PUT"])
def set_access_level(project_id):
    """Change a project's access level."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400
    try:
        level = AccessLevel.parse(data["access_level"])
    except (KeyError, TypeError, ValueError):
        return jsonify({"error": "access_level must be public, institution or private"}), 400

    record = get_service().set_access_level(project_id, level, viewer_identity())
    return jsonify(project_json(record))


@projects_bp.route("/api/admin/projects")
def list_all_projects():
    """Every project, unfiltered. Admins only."""
    identity = viewer_identity()
    if not is_admin(identity):
        logger.warning("[API] Unfiltered listing refused for %s", identity or "anonymous")
        return jsonify({"error": "Forbidden"}), 403

    return jsonify([project_json(r) for r in get_service().list_all_unfiltered()])

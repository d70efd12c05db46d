"""
Directory API routes - institution and department names for display.
"""

from flask import jsonify

from . import directory_bp
from .helpers import get_service


@directory_bp.route("/api/institutions")
def list_institutions():
    directory = get_service().directory
    return jsonify([i.model_dump() for i in directory.institutions()])


@directory_bp.route("/api/institutions/<int:institution_id>/departments")
def list_departments(institution_id):
    directory = get_service().directory
    return jsonify([d.model_dump() for d in directory.departments(institution_id)])

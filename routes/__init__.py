"""
Flask blueprints for the project registry API.
"""

from flask import Blueprint

# Create blueprints
projects_bp = Blueprint('projects', __name__)
directory_bp = Blueprint('directory', __name__)
# Import routes to register them
from . import projects
from . import directory

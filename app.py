#!/usr/bin/env python3
"""
Project Registry Web API

Flask app exposing the project service over HTTP.
"""

from flask import Flask, jsonify

import config
from directory import YamlDirectory
from logging_config import configure_logging, get_logger
from repositories import create_store
from service import ProjectService
from summarizer import LLMSummarizer

logger = get_logger(__name__)


def build_service() -> ProjectService:
    """Wire the configured store, directory and summarizer."""
    store = create_store()
    directory = YamlDirectory()
    summarizer = LLMSummarizer() if config.SUMMARIES_ENABLED else None
    return ProjectService(store, directory, summarizer)


def create_app(service: ProjectService = None, admins=None) -> Flask:
    """Create the Flask app around a service (built from config if omitted)."""
    app = Flask(__name__)
    app.config["REGISTRY_ADMINS"] = frozenset(config.ADMIN_IDENTITIES if admins is None else admins)
    app.extensions["registry"] = service or build_service()

    from routes import projects_bp, directory_bp
    app.register_blueprint(projects_bp)
    app.register_blueprint(directory_bp)

    @app.route("/health")
    def health():
        return jsonify({"status": "ok", "projects": len(app.extensions["registry"].store)})

    return app


if __name__ == "__main__":
    configure_logging(log_level=config.LOG_LEVEL, environment=config.ENVIRONMENT)
    logger.info("Starting registry on port %d", config.WEB_PORT)
    create_app().run(port=config.WEB_PORT)

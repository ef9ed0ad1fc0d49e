"""Flask application configuration and blueprint registration."""

from __future__ import annotations

from typing import Any, Dict, Optional

from flask import Flask, jsonify

from translate_dir.ai.exceptions import ProviderError, ProviderErrorKind
from translate_dir.errors import (
    ConfigurationError,
    FileOperationError,
    NotFoundError,
    TranslateDirError,
    ValidationError,
)
from translate_dir.logger import get_logger

from .routes.projects import projects_bp
from .routes.translation import translation_bp
from .routes.sync import sync_bp

logger = get_logger(__name__)


def status_for_error(error: TranslateDirError) -> int:
    """HTTP status for an engine error."""
    if isinstance(error, ProviderError):
        if error.kind is ProviderErrorKind.AUTH_MISSING:
            return 401
        if error.kind is ProviderErrorKind.TRANSIENT:
            return 503
        return 502
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, ConfigurationError):
        return 409
    if isinstance(error, FileOperationError):
        return 500
    return 500


def build_app(config: Dict[str, Any], provider: Optional[Any] = None,
              credentials: Optional[Any] = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)

    # Ensure JSON responses keep Unicode data.
    app.json.ensure_ascii = False
    app.config["TRANSLATE_DIR"] = config
    app.config["TRANSLATION_PROVIDER"] = provider
    app.config["PROVIDER_CREDENTIALS"] = credentials

    register_blueprints(app)
    register_default_routes(app)
    register_error_handlers(app)

    return app


def register_blueprints(app: Flask) -> None:
    """Register Flask blueprints."""
    app.register_blueprint(projects_bp, url_prefix="/api/projects")
    app.register_blueprint(translation_bp, url_prefix="/api/projects")
    app.register_blueprint(sync_bp, url_prefix="/api/projects")


def register_default_routes(app: Flask) -> None:
    """Register default health routes."""

    @app.get("/health")
    def health_check():
        logger.debug("Health check requested")
        return jsonify({"status": "ok"})


def register_error_handlers(app: Flask) -> None:

    @app.errorhandler(TranslateDirError)
    def handle_engine_error(e: TranslateDirError):
        status = status_for_error(e)
        if status >= 500:
            logger.error("%s: %s", type(e).__name__, e)
        else:
            logger.warning("%s: %s", type(e).__name__, e)
        return jsonify(e.to_dict()), status

    @app.errorhandler(404)
    def page_not_found(e):
        return jsonify({"error": "Not found", "code": "not_found", "details": {}}), 404

    @app.errorhandler(500)
    def internal_error(e):
        logger.exception("Internal server error: %s", e)
        return jsonify({"error": "Internal server error", "code": "internal_error", "details": {}}), 500

"""
App factory: create_app()

- Loads config (env, cookie options, static flags)
- Sets up logging
- Wires DI container (registry, FeatureFlip extension)
- Registers middleware (request IDs, per-request feature resolver)
- Registers blueprints from routes/*
- Installs global error handlers
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from app.config import Settings, load_settings
from app.logging_setup import configure_logging
from app.container import Container
from app import middleware
from service import UserLoader
from service.errors import FeatureFlipError
from service.registry import FeatureRegistry


def _register_blueprints(app: Flask) -> None:
    # Lazy imports to avoid circulars
    from routes.health_routes import bp as health_bp
    from routes.pages_routes import bp as pages_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(pages_bp)


def _install_error_handlers(app: Flask) -> None:
    @app.errorhandler(FeatureFlipError)
    def fflip_error(err: FeatureFlipError):
        app.logger.warning(f"{err.status_code}: {err}")
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(404)
    def not_found(err):
        return jsonify({"error": "not_found"}), 404

    @app.errorhandler(500)
    def server_error(err):
        app.logger.exception("Unhandled server error")
        return jsonify({"error": "server_error"}), 500


def _user_from_request() -> Dict[str, Any]:
    return {"id": request.headers.get("X-User-Id")}


def create_app(
    config_override: Dict[str, Any] | None = None,
    registry: Optional[FeatureRegistry] = None,
    user_loader: Optional[UserLoader] = None,
) -> Flask:
    # Settings & logging
    settings: Settings = load_settings(config_override)
    configure_logging(settings)

    app = Flask(__name__, static_folder=None)
    app.config["SECRET_KEY"] = settings.SECRET_KEY
    app.config["SETTINGS"] = settings

    # Dependency container (registry, extension)
    container = Container(settings, registry=registry, user_loader=user_loader or _user_from_request)
    app.container = container  # type: ignore[attr-defined]

    # Middleware
    middleware.install_request_id(app)
    container.flip.connect_all(app)

    # Blueprints
    _register_blueprints(app)

    # Error handlers
    _install_error_handlers(app)

    app.logger.info(
        f"App started with {len(container.registry)} flags, cookie={settings.FFLIP_COOKIE_NAME}"
    )
    return app

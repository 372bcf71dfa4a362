# oltradius/__init__.py
from __future__ import annotations

from typing import Any, Mapping

from flask import Flask, jsonify

from .settings import Config
from .extensions import db, limiter


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # ======================
    # Initialize Extensions
    # ======================
    db.init_app(app)
    limiter.init_app(app)

    # ======================
    # Import Models (CRITICAL)
    # ======================
    from . import models  # noqa: F401

    # ======================
    # App settings store (owned by the app, one per instance)
    # ======================
    from .services.app_settings import init_app_settings

    init_app_settings(app)

    # ======================
    # Global template context (Company identity + settings)
    # ======================
    from .services.app_settings import get_app_settings
    from .services.company_info import get_company_info, get_company_name

    @app.context_processor
    def inject_company():
        state = get_app_settings().get_state()
        return {
            "COMPANY_NAME": get_company_name(),
            "COMPANY_INFO": get_company_info(),
            "APP_LOCALE": state.locale.value,
            "COMPANY_SETTINGS": state.company.to_dict(),
        }

    # ======================
    # Register Blueprints
    # ======================
    from .routes import main

    app.register_blueprint(main)

    # ======================
    # Rate limit error handler
    # ======================
    @app.errorhandler(429)
    def ratelimit_handler(e):
        return jsonify({"error": "Too many requests. Please try again later."}), 429

    # ======================
    # Not found handler
    # ======================
    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found."}), 404

    return app

"""
Application factory and global configuration.

Creates the Flask app, applies security headers, configures rate limiting,
registers the JSON blueprints and CLI commands. Startup/config concerns stay
here; care and diary calculations live in plantdiary.services.
"""

from __future__ import annotations
import os
from flask import Flask, Response
from dotenv import load_dotenv
from .extensions import limiter
from .routes.home import home_bp
from .routes.diary import diary_bp
from .routes.plants import plants_bp
from .services import supabase_client


def _validate_production_security(app: Flask, cfg_path: str) -> None:
    """
    Validate critical security settings in production environments.

    Raises RuntimeError if production security requirements are not met.

    Checks:
    - SESSION_COOKIE_SECURE must be True (cookies only over HTTPS)
    - SECRET_KEY must be set and strong (>= 32 characters)
    - DEBUG must be False
    - PREFERRED_URL_SCHEME should be "https"
    """
    is_production = "ProdConfig" in cfg_path
    if not is_production or app.config.get("TESTING", False):
        return

    errors = []

    if not app.config.get("SESSION_COOKIE_SECURE", False):
        errors.append("SESSION_COOKIE_SECURE must be True in production.")

    secret_key = app.config.get("SECRET_KEY", "")
    if not secret_key:
        errors.append("SECRET_KEY is not set. Set FLASK_SECRET_KEY environment variable.")
    elif len(secret_key) < 32:
        errors.append(
            f"SECRET_KEY is too weak ({len(secret_key)} chars). "
            "Must be at least 32 characters for production security."
        )

    if app.config.get("DEBUG", False):
        errors.append("DEBUG must be False in production.")

    if app.config.get("PREFERRED_URL_SCHEME", "http") != "https":
        errors.append("PREFERRED_URL_SCHEME should be 'https' in production.")

    if errors:
        error_msg = "\n\n[ERROR] PRODUCTION SECURITY VALIDATION FAILED:\n\n" + "\n\n".join(f"  * {err}" for err in errors)
        raise RuntimeError(error_msg)

    app.logger.info("[OK] Production security validation passed")


def create_app() -> Flask:
    # override=False so production env vars are not overwritten by a stale .env file
    load_dotenv(override=False)

    app = Flask(__name__)

    # Allow APP_CONFIG to override (e.g., plantdiary.config.DevConfig)
    cfg_path = os.getenv("APP_CONFIG", "plantdiary.config.ProdConfig")
    try:
        app.config.from_object(cfg_path)
    except (ImportError, AttributeError) as e:
        app.logger.warning(f"Could not load config object {cfg_path}: {e}")

    _validate_production_security(app, cfg_path)

    limiter.init_app(app)

    if not app.config.get("RATELIMIT_ENABLED", True):
        limiter.enabled = False

    if not app.secret_key:
        app.secret_key = app.config.get("SECRET_KEY", "")

    app.json.sort_keys = app.config.get("JSON_SORT_KEYS", False)

    supabase_client.init_supabase(app)

    @app.after_request
    def apply_security_headers(resp: Response) -> Response:
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        resp.headers["X-Frame-Options"] = "DENY"

        # HSTS only when cookies are HTTPS-only (production)
        if app.config.get("SESSION_COOKIE_SECURE", False):
            resp.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return resp

    @app.errorhandler(404)
    def not_found(_e):
        return {"success": False, "error": "The requested item was not found."}, 404

    @app.errorhandler(429)
    def rate_limited(_e):
        return {"success": False, "error": "Too many requests. Please slow down."}, 429

    # Blueprints
    app.register_blueprint(home_bp)
    app.register_blueprint(diary_bp)
    app.register_blueprint(plants_bp)

    # Register CLI commands
    from plantdiary.cli import diary_summary_command, today_tasks_command
    app.cli.add_command(today_tasks_command)
    app.cli.add_command(diary_summary_command)

    return app

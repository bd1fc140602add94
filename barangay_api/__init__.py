from flask import Flask, g, request
from flask_cors import CORS
from dotenv import load_dotenv
import os
import time
import click
from barangay_api.extensions import db, migrate, jwt, limiter
from datetime import timedelta
import logging

# Load environment variables
load_dotenv()


def _csv(value):
    return [item.strip() for item in value.split(",") if item.strip()]


def create_app(config_overrides=None):
    app = Flask(__name__)

    app.config["APP_ENV"] = os.getenv("APP_ENV", "development")
    app.config["TESTING"] = app.config["APP_ENV"] == "testing"

    # Configure logging
    logging.basicConfig(level=logging.INFO)
    app.logger.setLevel(logging.INFO)

    # Configure database
    app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv(
        "DATABASE_URL", "postgresql://localhost/barangay_events"
    )
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False

    # Configure JWT
    app.config["JWT_SECRET_KEY"] = os.getenv("JWT_SECRET_KEY", "your-secret-key")
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(
        minutes=int(os.getenv("JWT_ACCESS_TOKEN_MINUTES", 15))
    )
    app.config["JWT_REFRESH_TOKEN_EXPIRES"] = timedelta(
        days=int(os.getenv("JWT_REFRESH_TOKEN_DAYS", 7))
    )
    app.config["JWT_TOKEN_LOCATION"] = ["headers"]
    app.config["JWT_HEADER_NAME"] = "Authorization"
    app.config["JWT_HEADER_TYPE"] = "Bearer"

    # Uploads
    app.config["UPLOAD_ROOT"] = os.getenv("UPLOAD_ROOT", "uploads")
    app.config["ALLOWED_IMAGE_MIME_TYPES"] = _csv(
        os.getenv("ALLOWED_IMAGE_MIME_TYPES", "image/jpeg,image/jpg,image/png")
    )
    app.config["MAX_CONTENT_LENGTH"] = int(os.getenv("MAX_UPLOAD_MB", 2)) * 1024 * 1024

    # SMS provider
    app.config["SMS_API_URL"] = os.getenv("SMS_API_URL", "https://api.textbee.io/send")
    app.config["SMS_API_KEY"] = os.getenv("SMS_API_KEY")

    # Credential lifetimes
    app.config["OTP_EXPIRY_MINUTES"] = int(os.getenv("OTP_EXPIRY_MINUTES", 5))
    app.config["MAX_OTP_ATTEMPTS"] = int(os.getenv("MAX_OTP_ATTEMPTS", 3))
    app.config["QR_EXPIRES_DAYS"] = int(os.getenv("QR_EXPIRES_DAYS", 30))

    # Rate limiting
    app.config["RATELIMIT_DEFAULT"] = "150 per minute; 10000 per hour"
    app.config["RATELIMIT_STORAGE_URI"] = os.getenv("LIMITER_STORAGE_URI", "memory://")
    app.config["RATELIMIT_STRATEGY"] = "fixed-window"

    if config_overrides:
        app.config.update(config_overrides)

    app.config["UPLOAD_ROOT"] = os.path.abspath(app.config["UPLOAD_ROOT"])

    if app.config["SQLALCHEMY_DATABASE_URI"].startswith("postgresql"):
        app.config.setdefault(
            "SQLALCHEMY_ENGINE_OPTIONS",
            {"pool_size": 20, "pool_timeout": 2, "pool_recycle": 1800, "pool_pre_ping": True},
        )

    # Initialize Flask extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    # Register models and JWT callbacks
    from barangay_api import models  # noqa: F401
    from barangay_api.utils import auth  # noqa: F401
    from barangay_api.error_handlers import register_error_handlers

    register_error_handlers(app)

    # Register blueprints
    from barangay_api.routes.user_routes import user_bp
    from barangay_api.routes.event_routes import event_bp
    from barangay_api.routes.registration_routes import registration_bp
    from barangay_api.routes.otp_routes import otp_bp
    from barangay_api.routes.qr_routes import qr_bp
    from barangay_api.routes.admin_routes import admin_bp
    from barangay_api.routes.manager_routes import manager_bp

    app.register_blueprint(user_bp, url_prefix="/api/auth")
    app.register_blueprint(event_bp, url_prefix="/api")
    app.register_blueprint(registration_bp, url_prefix="/api")
    app.register_blueprint(otp_bp, url_prefix="/api")
    app.register_blueprint(qr_bp, url_prefix="/api")
    app.register_blueprint(admin_bp, url_prefix="/api")
    app.register_blueprint(manager_bp, url_prefix="/api")

    # Set up CORS
    cors_origins = _csv(
        os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173")
    )
    app.logger.info(f"Initializing CORS with origins: {cors_origins}")

    CORS(
        app,
        resources={
            r"/api/*": {"origins": cors_origins},
        },
        supports_credentials=True,
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
        expose_headers=["Content-Type", "Content-Disposition"],
    )

    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def log_request(response):
        started = g.get("request_started")
        duration_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        app.logger.info(
            f"{request.method} {request.path} {response.status_code} {duration_ms:.1f}ms"
        )
        return response

    @app.cli.command("cleanup-revoked-tokens")
    def cleanup_revoked_tokens_command():
        """Delete token revocations whose tokens have expired."""
        from barangay_api.services import UserService

        click.echo(f"Deleted {UserService.cleanup_expired_revocations()} expired revocations")

    return app

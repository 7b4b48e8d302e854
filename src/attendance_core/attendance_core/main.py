from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.exceptions import ConfigError, DomainError
from .core.settings import AppSettings
from .database.bootstrap import apply_schema
from .database.connection import DBConfig, DatabaseConnection
from .extensions import limiter
from .users.controller import register as register_users
from .verification.controller import register as register_verification
from .whitelist.controller import register as register_whitelist

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if isinstance(e, ConfigError):
            logger.critical("Configuration error: %s", e)
            return jsonify({"error": "Server misconfigured"}), 500
        return jsonify({"error": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal Server Error"}), 500


def create_app(*, container: Container | None = None) -> Flask:
    load_dotenv(override=False)

    if container is None:
        settings_module = get_settings_module()
        settings = AppSettings.from_module(importlib.import_module(settings_module))
    else:
        settings_module = "<injected>"
        settings = container.settings

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = Flask(__name__)
    app.config["DEBUG"] = settings.debug
    app.config["TESTING"] = settings.testing
    app.config["RATELIMIT_ENABLED"] = not settings.testing
    app.config["RATELIMIT_STORAGE_URI"] = "memory://"

    if settings.auto_init_db:
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings.db_config))
        apply_schema(conn, schema_path=schema_path)

    container = container or build_container(settings=settings)
    container.codec.init_app(app)
    limiter.init_app(app)
    logger.info("Attendance core starting with settings=%s", settings_module)

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_whitelist(app, container)
    register_verification(app, container)

    return app

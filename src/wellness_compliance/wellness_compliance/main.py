from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.log import setup_logging
from .container import Container, build_container
from .core.constants import MAX_REPORT_DAYS
from .core.exceptions import (
    DomainError,
    InvalidTransitionError,
    NotFoundError,
    RangeTooLargeError,
    ValidationError,
)
from .database.bootstrap import apply_schema
from .exemptions.controller import register as register_exemptions
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (InvalidTransitionError, 409),
    (RangeTooLargeError, 400),
    (ValidationError, 400),
)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                return jsonify({"error": str(exc)}), status
        return jsonify({"error": str(exc)}), 400


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        json_output=bool(getattr(settings, "LOG_JSON", True)),
    )
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["JSON_SORT_KEYS"] = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "Starting with settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        container = build_container(
            db_config=db_config,
            max_report_days=int(getattr(settings, "MAX_REPORT_DAYS", MAX_REPORT_DAYS)),
            dispatch_inline=bool(getattr(settings, "CELERY_ALWAYS_EAGER", False)),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)

    _register_error_handlers(app)
    register_reports(app, container)
    register_exemptions(app, container)
    register_attendance(app, container)

    return app

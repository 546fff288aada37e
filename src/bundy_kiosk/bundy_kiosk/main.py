from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .core.constants import DEFAULT_TOGGLE_LOCK_TIMEOUT_SECONDS, DEFAULT_TOGGLE_MAX_ATTEMPTS
from .core.enums import LedgerBackend
from .database.bootstrap import apply_schema, list_tables
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings_module: str | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", None))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["ORG_ID"] = getattr(settings, "ORG_ID", "")
    db_config = getattr(settings, "DB_CONFIG")
    backend = getattr(settings, "STORE_BACKEND", LedgerBackend.MYSQL.value)

    logger.info(
        "Starting kiosk: settings=%s backend=%s org=%s",
        settings_module,
        backend,
        app.config["ORG_ID"] or "-",
    )

    if backend == LedgerBackend.MYSQL.value and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        db_config=db_config,
        backend=backend,
        org_id=app.config["ORG_ID"],
        demo_employees=getattr(settings, "DEMO_EMPLOYEES", ()),
        max_attempts=int(getattr(settings, "TOGGLE_MAX_ATTEMPTS", DEFAULT_TOGGLE_MAX_ATTEMPTS)),
        lock_timeout=getattr(settings, "TOGGLE_LOCK_TIMEOUT", DEFAULT_TOGGLE_LOCK_TIMEOUT_SECONDS),
    )
    app.extensions["bundy_kiosk"] = container

    register_attendance(app, container)

    return app

from __future__ import annotations

import importlib
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.web import register_error_handlers
from .container import Container, build_container
from .core.constants import QR_REDRAW_SECONDS, QR_VALIDITY_SECONDS
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig
from .events.controller import register as register_events
from .staff.controller import register as register_staff
from .staff.service import StaffAccount
from .students.controller import register as register_students

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"

logger = logging.getLogger(__name__)


def configure_logging(settings) -> None:
    level = str(getattr(settings, "LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)

    log_file = getattr(settings, "LOG_FILE", None)
    if log_file:
        handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass a prebuilt `container` to skip database bootstrap (tests wire in-memory repositories).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(settings)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")

        container = build_container(
            db_config=db_config,
            staff_account=StaffAccount(
                username=str(getattr(settings, "STAFF_USERNAME", "staff")),
                password_hash=str(getattr(settings, "STAFF_PASSWORD_HASH", "")),
            ),
            qr_validity_seconds=int(getattr(settings, "QR_VALIDITY_SECONDS", QR_VALIDITY_SECONDS)),
            qr_redraw_seconds=int(getattr(settings, "QR_REDRAW_SECONDS", QR_REDRAW_SECONDS)),
        )

    register_error_handlers(app)
    register_staff(app, container)
    register_students(app, container)
    register_events(app, container)
    register_attendance(app, container)

    return app

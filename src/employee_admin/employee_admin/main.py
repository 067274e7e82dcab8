from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.error_handlers import register_error_handlers
from .container import Container, build_container, build_memory_container
from .core.rules import BusinessRules
from .database.bootstrap import apply_schema, list_tables
from .leaves.controller import register as register_leaves

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(*, settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        container = _build_from_settings(settings)
    logger.info(
        "employee-admin started: settings=%s normal_hours=%s entitlement=%s",
        settings_module,
        container.rules.normal_hours_per_day,
        container.rules.annual_leave_entitlement,
    )

    app.extensions["container"] = container
    register_error_handlers(app)
    register_attendance(app, container)
    register_leaves(app, container)

    return app


def _build_from_settings(settings) -> Container:
    rules = BusinessRules.from_settings(settings)
    storage = str(getattr(settings, "STORAGE", "mysql")).lower()

    if storage == "memory":
        return build_memory_container(employee_ids=getattr(settings, "SEED_EMPLOYEE_IDS", ()), rules=rules)

    db_config = getattr(settings, "DB_CONFIG")
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    return build_container(db_config=db_config, rules=rules)

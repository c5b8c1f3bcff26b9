from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .appraisals.controller import register as register_appraisals
from .badges.controller import register as register_badges
from .common.logging_config import setup_logging
from .container import build_container
from .core.constants import DEFAULT_QUERY_STALE_SECONDS
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig
from .documents.controller import register as register_documents
from .employees.controller import register as register_employees
from .holidays.controller import register as register_holidays
from .inventory.controller import register as register_inventory
from .manager_notes.controller import register as register_manager_notes
from .nominations.controller import register as register_nominations
from .payroll.controller import register as register_payroll
from .resources.controller import register as register_resources
from .shifts.controller import register as register_shifts
from .sickness.controller import register as register_sickness
from .stock_requests.controller import register as register_stock_requests
from .todos.controller import register as register_todos
from .training.controller import register as register_training

logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        json_output=bool(getattr(settings, "LOG_JSON", False)),
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    logger.info("Starting staff-hub settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if getattr(settings, "AUTO_SEED_DB", False):
        apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")

    container = build_container(
        db_config=db_config,
        stale_seconds=float(getattr(settings, "QUERY_CACHE_STALE_SECONDS", DEFAULT_QUERY_STALE_SECONDS)),
    )

    register_employees(app, container)
    register_shifts(app, container)
    register_holidays(app, container)
    register_payroll(app, container)
    register_appraisals(app, container)
    register_todos(app, container)
    register_stock_requests(app, container)
    register_nominations(app, container)
    register_training(app, container)
    register_sickness(app, container)
    register_inventory(app, container)
    register_documents(app, container)
    register_resources(app, container)
    register_manager_notes(app, container)
    register_badges(app, container)

    return app

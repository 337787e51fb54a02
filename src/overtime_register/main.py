from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from loguru import logger

from config import get_settings_module

from .auth import web
from .common.logging_setup import configure_logging
from .container import Container, build_container
from .core.constants import DEFAULT_INACTIVITY_MINUTES
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_profiles, list_tables

from .auth.controller import register as register_auth
from .employees.controller import register as register_employees
from .overtime.controller import register as register_overtime
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings

ROOT_DIR = Path(__file__).resolve().parents[2]


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    Passing ``container`` skips all database bootstrapping (used by tests).
    """
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../templates", static_folder="../../static")

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings={} db={}@{}:{}/{}",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=ROOT_DIR / "database" / "schema.sql")
            logger.info("Schema ready (tables={})", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=ROOT_DIR / "database" / "seed.sql")
            ensure_demo_profiles(db_config)
            logger.info("Demo seed ready")

        container = build_container(db_config=db_config)

    web.install(
        app,
        timeout_minutes=float(getattr(settings, "INACTIVITY_TIMEOUT_MINUTES", DEFAULT_INACTIVITY_MINUTES)),
    )

    register_auth(app, container)
    register_overtime(app, container)
    register_employees(app, container)
    register_reports(app, container)
    register_settings(app, container)

    return app

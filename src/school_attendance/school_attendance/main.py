from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .container import build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .gateway.controller import register as register_attendance

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"
SCHEMA_PATH = DATABASE_DIR / "schema.sql"
SEED_PATH = DATABASE_DIR / "seed.sql"


def create_app() -> Flask:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    db_config = getattr(settings, "DB_CONFIG")
    attendance_store = getattr(settings, "ATTENDANCE_STORE", "mysql")

    logger.info(
        "settings=%s db=%s@%s:%s/%s store=%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        attendance_store,
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=SEED_PATH)
        logger.info("demo seed ready")

    container = build_container(
        db_config=db_config,
        attendance_store=attendance_store,
        good_threshold=getattr(settings, "STANDING_GOOD_THRESHOLD", 80),
        warning_threshold=getattr(settings, "STANDING_WARNING_THRESHOLD", 60),
    )
    app.extensions["school_attendance"] = container

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    register_attendance(app, container)

    return app

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .analytics.controller import register as register_analytics
from .attendance.controller import register as register_attendance
from .classes.controller import register as register_classes
from .common.web import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.seed import seed_demo_data
from .schedules.controller import register as register_schedules
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    Tests pass a prebuilt ``container``; otherwise one is built from the
    settings module picked by APP_ENV.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SCHOOL_NAME"] = getattr(settings, "SCHOOL_NAME", "")
    app.config["SCHOOL_TOWN"] = getattr(settings, "SCHOOL_TOWN", "")
    app.config["SCHOOL_YEAR"] = getattr(settings, "SCHOOL_YEAR", "")

    storage = str(getattr(settings, "STORAGE", "memory"))
    db_config = dict(getattr(settings, "DB_CONFIG", {}) or {})
    logger.info("starting settings=%s storage=%s", settings_module, storage)

    if container is None:
        if storage == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready tables=%d", len(list_tables(db_config)))

        container = build_container(
            storage=storage,
            db_config=db_config,
            insight_settings={
                "api_key": getattr(settings, "INSIGHT_API_KEY", ""),
                "model": getattr(settings, "INSIGHT_MODEL", None),
                "endpoint": getattr(settings, "INSIGHT_ENDPOINT", None),
                "timeout_seconds": getattr(settings, "INSIGHT_TIMEOUT_SECONDS", None),
                "language": getattr(settings, "INSIGHT_LANGUAGE", None),
            },
            alert_threshold=int(getattr(settings, "ALERT_STREAK_THRESHOLD", 3)),
            ranking_limit=int(getattr(settings, "CLASS_RANKING_LIMIT", 3)),
        )

        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            seed_demo_data(container)

        container.dashboard_service.refresh_insight()

    app.extensions["school_attendance"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_classes(app, container)
    register_students(app, container)
    register_schedules(app, container)
    register_attendance(app, container)
    register_analytics(app, container)

    return app

from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .api.controller import register as register_api
from .common.auth import current_user
from .common.datetime_utils import format_date
from .common.logging_setup import setup_logging
from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .dashboards.admin import register as register_admin
from .dashboards.staff import register as register_staff
from .dashboards.student import register as register_student
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_accounts, list_tables
from .profiles.controller import register as register_profiles

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    ``container`` lets tests inject in-memory repositories; when omitted the
    MySQL-backed container is built from the active settings module.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config)
            ensure_demo_accounts(db_config)

        container = build_container(db_config=db_config)

    app.extensions["rideconnect"] = container

    app.jinja_env.filters["date"] = format_date
    app.context_processor(lambda: {"current_user": current_user()})

    register_profiles(app, container)
    register_student(app, container)
    register_staff(app, container)
    register_admin(app, container)
    register_api(app, container)

    return app

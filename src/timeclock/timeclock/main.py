from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .attendance.settings import AttendanceSettings
from .container import Container, build_container
from .database.bootstrap import apply_schema
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_MB", 50)) * 1024 * 1024

    logging.basicConfig(level=logging.DEBUG if app.config["DEBUG"] else logging.INFO)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG", None)
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)

        default_settings = AttendanceSettings.from_mapping(
            {
                "workStartTime": getattr(settings, "DEFAULT_WORK_START_TIME", None),
                "workEndTime": getattr(settings, "DEFAULT_WORK_END_TIME", None),
                "lateThresholdMinutes": getattr(settings, "DEFAULT_LATE_THRESHOLD_MINUTES", None),
                "earlyOutThresholdMinutes": getattr(settings, "DEFAULT_EARLY_OUT_THRESHOLD_MINUTES", None),
            }
        )
        container = build_container(
            db_config=db_config,
            utc_offset=getattr(settings, "CIVIL_UTC_OFFSET", "+05:30"),
            default_settings=default_settings,
        )

    register_attendance(app, container)
    register_payroll(app, container)

    return app

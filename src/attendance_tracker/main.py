from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .config import get_settings_module
from .container import build_container
from .roster.controller import register as register_roster

logger = logging.getLogger(__name__)


def create_app(overrides: Optional[dict] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["STORAGE_DIR"] = getattr(settings, "STORAGE_DIR")
    app.config["RESTORE_ROSTER_ON_STARTUP"] = bool(getattr(settings, "RESTORE_ROSTER_ON_STARTUP", False))
    app.config.update(overrides or {})

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("settings=%s storage=%s", settings_module, app.config["STORAGE_DIR"])

    container = build_container(storage_dir=app.config["STORAGE_DIR"])
    if app.config["RESTORE_ROSTER_ON_STARTUP"]:
        container.roster_service.restore_from_records()

    register_error_handlers(app)
    register_roster(app, container)
    register_attendance(app, container)

    return app

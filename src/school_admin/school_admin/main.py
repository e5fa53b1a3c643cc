from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .academic.controller import register as register_academic
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .dashboard.controller import register as register_dashboard
from .dormitory.controller import register as register_dormitory
from .leave.controller import register as register_leave
from .nutrition.controller import register as register_nutrition
from .service_registration.controller import register as register_service_registration
from .students.controller import register as register_students
from .supply.controller import register as register_supply
from .users.controller import register as register_users


def create_app(*, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_COOKIE_SECURE"] = bool(getattr(settings, "SESSION_COOKIE_SECURE", False))
    app.json.ensure_ascii = False

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    sync_config = getattr(settings, "SYNC_CONFIG")
    if app.config["DEBUG"]:
        app.logger.info("settings=%s bridge=%s", settings_module, sync_config.get("script_url") or "<unset>")

    if container is None:
        container = build_container(sync_config=sync_config, school_config=getattr(settings, "SCHOOL_CONFIG", {}))

    register_users(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_academic(app, container)
    register_nutrition(app, container)
    register_service_registration(app, container)
    register_supply(app, container)
    register_dormitory(app, container)
    register_leave(app, container)
    register_dashboard(app, container)

    return app

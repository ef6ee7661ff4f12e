from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .access.controller import register as register_access
from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, build_container
from .core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .logging_utils import setup_logging
from .reports.controller import register as register_reports


def register_error_handlers(app: Flask) -> None:
    def _error(status_code: int):
        def handler(exc: Exception):
            return jsonify({"ok": False, "message": str(exc)}), status_code

        return handler

    app.register_error_handler(ValidationError, _error(400))
    app.register_error_handler(AuthenticationError, _error(401))
    app.register_error_handler(AuthorizationError, _error(403))


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(str(getattr(settings, "LOG_LEVEL", "INFO")), json_output=bool(getattr(settings, "LOG_JSON", False)))
    app.logger.info("punchlog starting", extra={"settings": settings_module})

    container = container or build_container(settings)
    app.extensions["punchlog"] = container

    register_error_handlers(app)
    register_access(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    if bool(getattr(settings, "BACKGROUND_REFRESH", False)):
        container.refresher.start()

    return app

from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .announcements.controller import register as register_announcements
from .common.web import fail
from .container import Container, build_container
from .core.exceptions import (
    AlreadyDecidedError,
    AlreadySubmittedError,
    AuthenticationError,
    AuthorizationError,
    DomainError,
    GatewayError,
    MeetingClosedError,
    NotFoundError,
)
from .events.controller import register as register_events
from .hours.controller import register as register_hours
from .meetings.controller import register as register_meetings
from .students.controller import register as register_students
from .support.controller import register as register_support

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (MeetingClosedError, 409),
    (AlreadySubmittedError, 409),
    (AlreadyDecidedError, 409),
)


def _status_for(error: DomainError) -> int:
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return fail(str(e), _status_for(e))

    @app.errorhandler(GatewayError)
    def handle_gateway_error(e: GatewayError):
        logger.error("Backend failure: %s", e)
        if app.config.get("DEBUG"):
            return fail(str(e), 502)
        return fail("The club database is unavailable right now. Please try again.", 502)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    supabase_config = getattr(settings, "SUPABASE_CONFIG")
    logger.info("settings=%s backend=%s", settings_module, supabase_config.get("url"))

    if container is None:
        container = build_container(
            supabase_config=supabase_config,
            admin_email=getattr(settings, "ADMIN_EMAIL", ""),
            admin_password_hash=getattr(settings, "ADMIN_PASSWORD_HASH", ""),
        )

    register_error_handlers(app)
    register_students(app, container)
    register_hours(app, container)
    register_meetings(app, container)
    register_events(app, container)
    register_announcements(app, container)
    register_support(app, container)

    return app

from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Optional

import requests
from dotenv import load_dotenv
from flask import Flask, has_request_context, session

from .assignments.controller import register as register_assignments
from .attendance.controller import register as register_attendance
from .certificates.controller import register as register_certificates
from .common.web import fail
from .config import get_settings_module
from .container import build_container
from .courses.controller import register as register_courses
from .dashboards.controller import register as register_dashboards
from .facilitators.controller import register as register_facilitators
from .notifications.controller import register as register_notifications
from .programs.controller import register as register_programs
from .reports.controller import register as register_reports
from .roadmaps.controller import register as register_roadmaps
from .site_settings.controller import register as register_site_settings
from .submissions.controller import register as register_submissions
from .tickets.controller import register as register_tickets
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _session_token() -> Optional[str]:
    if not has_request_context():
        return None
    return session.get("access_token")


def create_app(settings_module: Optional[str] = None, *, http: Optional[requests.Session] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    api_config = getattr(settings, "API_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_LIFETIME_DAYS", 7)))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("settings=%s api=%s", settings_module, api_config.get("base_url"))

    container = build_container(api_config=api_config, token_provider=_session_token, http=http)
    app.extensions["program_portal"] = container

    register_users(app, container)
    register_dashboards(app, container)
    register_programs(app, container)
    register_attendance(app, container)
    register_courses(app, container)
    register_roadmaps(app, container)
    register_facilitators(app, container)
    register_certificates(app, container)
    register_assignments(app, container)
    register_notifications(app, container)
    register_reports(app, container)
    register_tickets(app, container)
    register_submissions(app, container)
    register_site_settings(app, container)

    @app.errorhandler(404)
    def not_found(_e):
        return fail("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return fail("Method not allowed", 405)

    return app

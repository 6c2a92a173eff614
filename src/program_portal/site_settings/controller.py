from __future__ import annotations

from flask import Flask

from ..common.web import current_role, dump, handle_errors, json_body, ok, roles_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.settings_service

    @app.route("/settings", methods=["GET"], endpoint="app_settings")
    @roles_required(Role.SUPER_ADMIN)
    @handle_errors("Failed to load settings")
    def app_settings():
        return ok(settings=dump(service.get_settings(current_role=current_role())))

    @app.route("/settings", methods=["PATCH"], endpoint="update_app_settings")
    @roles_required(Role.SUPER_ADMIN)
    @handle_errors("Failed to save settings")
    def update_app_settings():
        data = json_body()
        settings = service.update_settings(
            current_role=current_role(),
            site_name=data.get("siteName"),
            site_logo_url=data.get("siteLogoUrl"),
            default_program_duration_days=data.get("defaultProgramDurationDays"),
            allow_manager_program_creation=data.get("allowManagerProgramCreation"),
            send_welcome_email=data.get("sendWelcomeEmail"),
            admin_notification_email=data.get("adminNotificationEmail"),
        )
        return ok("Settings saved", settings=dump(settings))

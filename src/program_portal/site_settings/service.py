from __future__ import annotations

import logging

from ..common.validators import require_non_empty, require_positive
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.service import require_email
from .model import AppSettings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)

# form field -> (API field, parser)
_FIELDS = {
    "site_name": ("siteName", lambda v: require_non_empty(v, "Site name")),
    "site_logo_url": ("siteLogoUrl", lambda v: require_non_empty(v, "Logo URL")),
    "default_program_duration_days": (
        "defaultProgramDurationDays",
        lambda v: require_positive(v, "Default program duration"),
    ),
    "allow_manager_program_creation": ("allowManagerProgramCreation", bool),
    "send_welcome_email": ("sendWelcomeEmail", bool),
    "admin_notification_email": ("adminNotificationEmail", require_email),
}


class SettingsService:
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get_settings(self, *, current_role: Role) -> AppSettings:
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a SuperAdmin can view system settings")
        return self._settings.get()

    def update_settings(self, *, current_role: Role, **changes) -> AppSettings:
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a SuperAdmin can change system settings")

        payload = {}
        for name, value in changes.items():
            if value is None:
                continue
            if name not in _FIELDS:
                raise ValidationError(f"Unknown setting: {name}")
            api_name, parse = _FIELDS[name]
            payload[api_name] = parse(value)
        if not payload:
            raise ValidationError("Nothing to update")

        settings = self._settings.update(payload)
        logger.info("System settings updated: %s", ", ".join(sorted(payload)))
        return settings

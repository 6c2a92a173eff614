from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AppSettings:
    """Portal-wide settings, one document on the server."""

    site_name: str = "KLab Program Manager"
    site_logo_url: str = "/logo.png"
    default_program_duration_days: int = 90
    allow_manager_program_creation: bool = True
    send_welcome_email: bool = True
    admin_notification_email: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "AppSettings":
        defaults = cls()
        return cls(
            site_name=data.get("siteName") or defaults.site_name,
            site_logo_url=data.get("siteLogoUrl") or defaults.site_logo_url,
            default_program_duration_days=int(
                data.get("defaultProgramDurationDays") or defaults.default_program_duration_days
            ),
            allow_manager_program_creation=bool(
                data.get("allowManagerProgramCreation", defaults.allow_manager_program_creation)
            ),
            send_welcome_email=bool(data.get("sendWelcomeEmail", defaults.send_welcome_email)),
            admin_notification_email=data.get("adminNotificationEmail") or None,
        )

from __future__ import annotations

import pytest

from program_portal.core.enums import Role
from program_portal.core.exceptions import AuthorizationError, ValidationError
from program_portal.site_settings.model import AppSettings
from program_portal.site_settings.rest_settings_repository import RestSettingsRepository
from program_portal.site_settings.service import SettingsService


class InMemorySettings:
    def __init__(self):
        self.updates: list[dict] = []

    def get(self):
        return AppSettings()

    def update(self, payload):
        self.updates.append(payload)
        return AppSettings.from_api(payload)


def test_update_maps_fields_and_skips_missing_ones():
    repo = InMemorySettings()

    settings = SettingsService(repo).update_settings(
        current_role=Role.SUPER_ADMIN,
        site_name=" KLab ",
        default_program_duration_days="120",
        send_welcome_email=False,
        admin_notification_email=None,
    )

    assert repo.updates == [{"siteName": "KLab", "defaultProgramDurationDays": 120, "sendWelcomeEmail": False}]
    assert settings.default_program_duration_days == 120
    assert settings.send_welcome_email is False


@pytest.mark.parametrize(
    "changes",
    [{"site_name": ""}, {"default_program_duration_days": 0}, {"admin_notification_email": "nope"}, {}],
)
def test_invalid_settings_are_rejected_locally(changes):
    repo = InMemorySettings()

    with pytest.raises(ValidationError):
        SettingsService(repo).update_settings(current_role=Role.SUPER_ADMIN, **changes)

    assert repo.updates == []


@pytest.mark.parametrize("role", [Role.PROGRAM_MANAGER, Role.IT_SUPPORT])
def test_only_super_admin_manages_settings(role):
    service = SettingsService(InMemorySettings())

    with pytest.raises(AuthorizationError):
        service.get_settings(current_role=role)
    with pytest.raises(AuthorizationError):
        service.update_settings(current_role=role, site_name="x")


def test_rest_settings_fall_back_to_defaults(conn, http):
    http.route("GET", "/settings", data={"siteName": "Academy", "allowManagerProgramCreation": False})

    settings = RestSettingsRepository(conn).get()

    assert settings.site_name == "Academy"
    assert settings.allow_manager_program_creation is False
    assert settings.default_program_duration_days == 90


def test_settings_route(sign_in, http):
    http.route("PATCH", "/settings", data={"siteName": "Academy"})
    client = sign_in("SuperAdmin")

    resp = client.patch("/settings", json={"siteName": "Academy"})

    assert resp.status_code == 200
    assert resp.get_json()["settings"]["site_name"] == "Academy"
    assert http.calls_to("PATCH", "/settings")[0]["json"] == {"siteName": "Academy"}

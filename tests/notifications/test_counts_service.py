from __future__ import annotations

import pytest

from program_portal.core.enums import Role
from program_portal.core.exceptions import ApiError, SessionExpiredError
from program_portal.notifications.model import SidebarCounts
from program_portal.notifications.rest_notification_repository import RestNotificationRepository
from program_portal.notifications.service import CountsService, NotificationService


class Programs:
    def __init__(self, error: ApiError | None = None):
        self.error = error

    def list_all(self):
        if self.error:
            raise self.error
        return ["p1", "p2", "p3"]

    def list_archived(self):
        return ["p0"]


class Users:
    def list_users(self, *, active=True, role=None):
        return {Role.FACILITATOR: ["f1", "f2"], Role.TRAINEE: ["t1", "t2", "t3", "t4"]}.get(role, [])


class Certificates:
    def list_all(self):
        return ["c1"]


@pytest.mark.parametrize("role", [Role.PROGRAM_MANAGER, Role.SUPER_ADMIN])
def test_managers_get_real_counts(role):
    counts = CountsService(Programs(), Users(), Certificates()).counts_for(role)

    assert counts == SidebarCounts(programs=3, archived=1, facilitators=2, trainees=4, certificates=1)


@pytest.mark.parametrize("role", [Role.FACILITATOR, Role.TRAINEE, Role.IT_SUPPORT, None])
def test_other_roles_get_zeros(role):
    assert CountsService(Programs(), Users(), Certificates()).counts_for(role) == SidebarCounts()


def test_counts_fall_back_to_zeros_on_api_error():
    service = CountsService(Programs(error=ApiError("down", status_code=503)), Users(), Certificates())

    assert service.counts_for(Role.SUPER_ADMIN) == SidebarCounts()


def test_expired_session_is_not_hidden_behind_zero_counts():
    service = CountsService(Programs(error=SessionExpiredError("jwt expired", status_code=401)), Users(), Certificates())

    with pytest.raises(SessionExpiredError):
        service.counts_for(Role.PROGRAM_MANAGER)


def test_notification_page_uses_fixed_limit(conn, http):
    http.route(
        "GET",
        "/notifications",
        data={
            "docs": [{"_id": "n1", "title": "Approved", "type": "approval", "isRead": False}],
            "unreadCount": 1,
            "page": 2,
            "totalPages": 3,
        },
    )

    page = NotificationService(RestNotificationRepository(conn)).page(2)

    assert http.calls[0]["params"] == {"page": 2, "limit": 10}
    assert page.unread_count == 1
    assert page.items[0].type.value == "approval"
    assert (page.page, page.total_pages) == (2, 3)


def test_toggle_read_returns_notification_and_unread_count(conn, http):
    http.route(
        "PATCH",
        "/notifications/n1/toggle-read",
        data={"notification": {"_id": "n1", "isRead": True}, "unreadCount": 4},
    )

    notification, unread = NotificationService(RestNotificationRepository(conn)).toggle_read("n1")

    assert notification.is_read
    assert unread == 4

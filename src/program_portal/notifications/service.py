from __future__ import annotations

import logging
from typing import Optional

from ..certificates.repository import CertificateRepository
from ..common.validators import require_id
from ..core.constants import NOTIFICATIONS_PAGE_LIMIT
from ..core.enums import Role
from ..core.exceptions import ApiError, SessionExpiredError
from ..programs.repository import ProgramRepository
from ..users.repository import UserRepository
from .model import Notification, NotificationPage, SidebarCounts
from .repository import NotificationRepository

logger = logging.getLogger(__name__)

COUNTED_ROLES = {Role.PROGRAM_MANAGER, Role.SUPER_ADMIN}


class NotificationService:
    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def page(self, page: int = 1) -> NotificationPage:
        return self._notifications.list_page(page=max(1, int(page)), limit=NOTIFICATIONS_PAGE_LIMIT)

    def mark_all_read(self) -> int:
        return self._notifications.mark_all_read()

    def toggle_read(self, notification_id: str, *, is_read: Optional[bool] = None) -> tuple[Notification, int]:
        return self._notifications.toggle_read(require_id(notification_id, "Notification"), is_read=is_read)

    def delete(self, notification_id: str) -> int:
        return self._notifications.delete(require_id(notification_id, "Notification"))


class CountsService:
    """Sidebar badge counts. Only managers get numbers; everyone else sees zeros."""

    def __init__(self, programs: ProgramRepository, users: UserRepository, certificates: CertificateRepository):
        self._programs = programs
        self._users = users
        self._certificates = certificates

    def counts_for(self, role: Optional[Role]) -> SidebarCounts:
        if role not in COUNTED_ROLES:
            return SidebarCounts()
        try:
            return SidebarCounts(
                programs=len(self._programs.list_all()),
                archived=len(self._programs.list_archived()),
                facilitators=len(self._users.list_users(active=True, role=Role.FACILITATOR)),
                trainees=len(self._users.list_users(active=True, role=Role.TRAINEE)),
                certificates=len(self._certificates.list_all()),
            )
        except SessionExpiredError:
            raise
        except ApiError as e:
            logger.warning("Could not load sidebar counts: %s", e.message)
            return SidebarCounts()

from __future__ import annotations

from typing import Optional, Protocol

from .model import Notification, NotificationPage


class NotificationRepository(Protocol):
    def list_page(self, *, page: int, limit: int) -> NotificationPage:
        raise NotImplementedError

    def mark_all_read(self) -> int:
        """Return the new unread count."""

        raise NotImplementedError

    def toggle_read(self, notification_id: str, *, is_read: Optional[bool] = None) -> tuple[Notification, int]:
        raise NotImplementedError

    def delete(self, notification_id: str) -> int:
        raise NotImplementedError

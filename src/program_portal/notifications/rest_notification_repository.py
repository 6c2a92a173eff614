from __future__ import annotations

from typing import Optional

from ..api.connection import ApiConnection
from .model import Notification, NotificationPage


def _unread(data) -> int:
    return int((data or {}).get("unreadCount") or 0)


class RestNotificationRepository:
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def list_page(self, *, page: int, limit: int) -> NotificationPage:
        return NotificationPage.from_api(self._conn.get("/notifications", params={"page": page, "limit": limit}))

    def mark_all_read(self) -> int:
        return _unread(self._conn.post("/notifications/mark-all-read"))

    def toggle_read(self, notification_id: str, *, is_read: Optional[bool] = None) -> tuple[Notification, int]:
        body = {} if is_read is None else {"isRead": is_read}
        data = self._conn.patch(f"/notifications/{notification_id}/toggle-read", json=body) or {}
        return Notification.from_api(data.get("notification") or {}), _unread(data)

    def delete(self, notification_id: str) -> int:
        return _unread(self._conn.delete(f"/notifications/{notification_id}"))

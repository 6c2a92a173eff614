from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..api.rest_base import as_list, parse_datetime, ref_id, ref_name
from ..core.enums import NotificationType, parse_enum


@dataclass(frozen=True)
class Notification:
    notification_id: str
    title: str
    message: str
    type: NotificationType
    is_read: bool
    created_at: Optional[datetime] = None
    link: Optional[str] = None
    sender_id: Optional[str] = None
    sender_name: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "Notification":
        return cls(
            notification_id=str(data.get("_id") or ""),
            title=data.get("title") or "",
            message=data.get("message") or "",
            type=parse_enum(NotificationType, data.get("type"), NotificationType.INFO),
            is_read=bool(data.get("isRead", False)),
            created_at=parse_datetime(data.get("createdAt")),
            link=data.get("link"),
            sender_id=ref_id(data.get("sender")),
            sender_name=ref_name(data.get("sender"), default=""),
        )


@dataclass(frozen=True)
class NotificationPage:
    items: list[Notification] = field(default_factory=list)
    unread_count: int = 0
    page: int = 1
    total_pages: int = 1

    @classmethod
    def from_api(cls, data: Optional[dict]) -> "NotificationPage":
        data = data or {}
        return cls(
            items=[Notification.from_api(n) for n in as_list(data.get("docs"))],
            unread_count=int(data.get("unreadCount") or 0),
            page=int(data.get("page") or 1),
            total_pages=int(data.get("totalPages") or 1),
        )


@dataclass(frozen=True)
class SidebarCounts:
    programs: int = 0
    archived: int = 0
    facilitators: int = 0
    trainees: int = 0
    certificates: int = 0

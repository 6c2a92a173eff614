from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..api.rest_base import parse_datetime, ref_id, ref_name
from ..core.enums import TicketCategory, TicketPriority, TicketStatus, parse_enum


@dataclass(frozen=True)
class TicketComment:
    author_id: Optional[str]
    author_name: str
    message: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: dict) -> "TicketComment":
        return cls(
            author_id=ref_id(data.get("author")),
            author_name=ref_name(data.get("author")),
            message=data.get("message") or "",
            created_at=parse_datetime(data.get("createdAt")),
        )


@dataclass(frozen=True)
class Ticket:
    """Domain entity: a support request raised by any user, worked by IT-Support."""

    ticket_id: str
    title: str
    description: str
    category: TicketCategory
    priority: TicketPriority
    status: TicketStatus
    created_by_id: Optional[str] = None
    created_by_name: str = ""
    assigned_to_id: Optional[str] = None
    assigned_to_name: str = ""
    resolution: Optional[str] = None
    comments: tuple[TicketComment, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: dict) -> "Ticket":
        assignee = data.get("assignedTo")
        return cls(
            ticket_id=str(data.get("_id") or ""),
            title=data.get("title") or "",
            description=data.get("description") or "",
            category=parse_enum(TicketCategory, data.get("category"), TicketCategory.OTHER),
            priority=parse_enum(TicketPriority, data.get("priority"), TicketPriority.MEDIUM),
            status=parse_enum(TicketStatus, data.get("status"), TicketStatus.OPEN),
            created_by_id=ref_id(data.get("createdBy")),
            created_by_name=ref_name(data.get("createdBy")),
            assigned_to_id=ref_id(assignee),
            assigned_to_name=ref_name(assignee, default="Unassigned") if assignee else "Unassigned",
            resolution=data.get("resolution"),
            comments=tuple(TicketComment.from_api(c) for c in (data.get("comments") or []) if isinstance(c, dict)),
            created_at=parse_datetime(data.get("createdAt")),
            updated_at=parse_datetime(data.get("updatedAt")),
        )

from __future__ import annotations

import logging
from typing import Optional

from ..common.listing import count_by, filter_by_status, search
from ..common.validators import require_id, require_non_empty
from ..core.enums import Role, TicketCategory, TicketPriority, TicketStatus, parse_enum
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Ticket
from .repository import TicketRepository

logger = logging.getLogger(__name__)

SUPPORT_STAFF = {Role.IT_SUPPORT, Role.SUPER_ADMIN}
CLOSED_STATUSES = frozenset({TicketStatus.RESOLVED, TicketStatus.CLOSED})


def _choice(enum_cls, value, field_name: str):
    choice = parse_enum(enum_cls, value, None)
    if choice is None:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")
    return choice


class TicketService:
    def __init__(self, tickets: TicketRepository):
        self._tickets = tickets

    def list_tickets(self) -> list[Ticket]:
        return list(self._tickets.list_all())

    @staticmethod
    def narrow(
        tickets: list[Ticket],
        *,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        term: Optional[str] = None,
    ) -> list[Ticket]:
        """Visible subset of already-fetched tickets."""

        rows = filter_by_status(tickets, status)
        rows = filter_by_status(rows, priority, key=lambda t: t.priority)
        return search(rows, term, fields=lambda t: (t.title, t.description, t.created_by_name))

    def create_ticket(
        self,
        *,
        title: str,
        description: str,
        category: Optional[str],
        priority: Optional[str] = None,
    ) -> Ticket:
        payload = {
            "title": require_non_empty(title, "Title"),
            "description": require_non_empty(description, "Description"),
            "category": _choice(TicketCategory, category, "Category").value,
            "priority": (_choice(TicketPriority, priority, "Priority") if priority else TicketPriority.MEDIUM).value,
        }
        ticket = self._tickets.create(payload)
        logger.info("Ticket %s raised (%s)", ticket.ticket_id, ticket.category.value)
        return ticket

    def update_ticket(
        self,
        *,
        current_role: Role,
        ticket_id: str,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        assigned_to: Optional[str] = None,
        resolution: Optional[str] = None,
    ) -> Ticket:
        """Support staff triage: status, priority, assignee and resolution note."""

        if current_role not in SUPPORT_STAFF:
            raise AuthorizationError("Only IT-Support can update tickets")

        payload: dict = {}
        if status:
            payload["status"] = _choice(TicketStatus, status, "Status").value
        if priority:
            payload["priority"] = _choice(TicketPriority, priority, "Priority").value
        if assigned_to:
            payload["assignedTo"] = require_id(assigned_to, "Assignee")
        if resolution is not None:
            payload["resolution"] = resolution.strip()
        if not payload:
            raise ValidationError("Nothing to update")
        if payload.get("status") == TicketStatus.RESOLVED.value and not payload.get("resolution"):
            raise ValidationError("A resolution note is required to resolve a ticket")

        return self._tickets.update(require_id(ticket_id, "Ticket"), payload)

    def add_comment(self, *, ticket_id: str, message: Optional[str]) -> Ticket:
        return self._tickets.add_comment(require_id(ticket_id, "Ticket"), message=require_non_empty(message, "Comment"))

    @staticmethod
    def stats(tickets: list[Ticket]) -> dict[str, int]:
        stats = count_by(tickets, lambda t: t.status, keys=list(TicketStatus))
        stats["total"] = len(tickets)
        stats["urgent"] = sum(
            1 for t in tickets if t.priority == TicketPriority.CRITICAL and t.status not in CLOSED_STATUSES
        )
        return stats

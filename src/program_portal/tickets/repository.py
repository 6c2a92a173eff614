from __future__ import annotations

from typing import Protocol, Sequence

from .model import Ticket


class TicketRepository(Protocol):
    def list_all(self) -> Sequence[Ticket]:
        """IT-Support and SuperAdmin get every ticket; other users only their own."""

        raise NotImplementedError

    def create(self, payload: dict) -> Ticket:
        raise NotImplementedError

    def update(self, ticket_id: str, payload: dict) -> Ticket:
        raise NotImplementedError

    def add_comment(self, ticket_id: str, *, message: str) -> Ticket:
        raise NotImplementedError

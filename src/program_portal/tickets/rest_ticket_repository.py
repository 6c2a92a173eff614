from __future__ import annotations

from typing import Sequence

from ..api.connection import ApiConnection
from ..api.rest_base import as_list
from .model import Ticket


class RestTicketRepository:
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def list_all(self) -> Sequence[Ticket]:
        return [Ticket.from_api(t) for t in as_list(self._conn.get("/tickets"))]

    def create(self, payload: dict) -> Ticket:
        return Ticket.from_api(self._conn.post("/tickets", json=payload) or {})

    def update(self, ticket_id: str, payload: dict) -> Ticket:
        return Ticket.from_api(self._conn.patch(f"/tickets/{ticket_id}", json=payload) or {})

    def add_comment(self, ticket_id: str, *, message: str) -> Ticket:
        return Ticket.from_api(self._conn.post(f"/tickets/{ticket_id}/comments", json={"message": message}) or {})

from __future__ import annotations

from typing import Sequence

from ..api.connection import ApiConnection
from ..api.rest_base import as_list
from .model import Assignment, ResendResult


class RestAssignmentRepository:
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def _many(self, data) -> list[Assignment]:
        return [Assignment.from_api(a) for a in as_list(data)]

    def list_mine(self) -> Sequence[Assignment]:
        return self._many(self._conn.get("/assignments/my-assignments"))

    def list_available(self) -> Sequence[Assignment]:
        return self._many(self._conn.get("/assignments/my-available"))

    def list_for_course(self, course_id: str) -> Sequence[Assignment]:
        return self._many(self._conn.get(f"/assignments/course/{course_id}"))

    def list_for_program(self, program_id: str) -> Sequence[Assignment]:
        return self._many(self._conn.get(f"/assignments/program/{program_id}"))

    def create(self, payload: dict) -> Assignment:
        return Assignment.from_api(self._conn.post("/assignments", json=payload) or {})

    def update(self, assignment_id: str, payload: dict) -> Assignment:
        return Assignment.from_api(self._conn.patch(f"/assignments/{assignment_id}", json=payload) or {})

    def delete(self, assignment_id: str) -> None:
        self._conn.delete(f"/assignments/{assignment_id}")

    def resend_notifications(self, assignment_id: str) -> ResendResult:
        data = self._conn.post(f"/assignments/{assignment_id}/resend-notifications") or {}
        return ResendResult(sent_count=int(data.get("sentCount") or 0), total_count=int(data.get("totalCount") or 0))

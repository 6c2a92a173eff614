from __future__ import annotations

from typing import BinaryIO, Sequence

from ..api.connection import ApiConnection
from ..api.rest_base import as_list
from .model import Course


class RestCourseRepository:
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def _many(self, data) -> list[Course]:
        return [Course.from_api(c) for c in as_list(data)]

    def create(self, *, title: str, description: str, program_id: str, filename: str, document: BinaryIO) -> Course:
        data = self._conn.post(
            "/courses",
            data={"title": title, "description": description, "programId": program_id},
            files={"courseDocument": (filename, document)},
        )
        return Course.from_api(data or {})

    def list_mine(self) -> Sequence[Course]:
        return self._many(self._conn.get("/courses/my-courses"))

    def list_for_program(self, program_id: str) -> Sequence[Course]:
        return self._many(self._conn.get(f"/courses/program/{program_id}"))

    def list_pending(self) -> Sequence[Course]:
        return self._many(self._conn.get("/courses/pending"))

    def update(self, course_id: str, payload: dict) -> Course:
        return Course.from_api(self._conn.patch(f"/courses/{course_id}", json=payload) or {})

    def delete(self, course_id: str) -> None:
        self._conn.delete(f"/courses/{course_id}")

    def request_approval(self, course_id: str) -> Course:
        return Course.from_api(self._conn.patch(f"/courses/{course_id}/request-approval") or {})

    def approve(self, course_id: str) -> Course:
        return Course.from_api(self._conn.patch(f"/courses/{course_id}/approve") or {})

    def reject(self, course_id: str, *, reason: str) -> Course:
        return Course.from_api(self._conn.patch(f"/courses/{course_id}/reject", json={"reason": reason}) or {})

    def activate(self, course_id: str) -> Course:
        return Course.from_api(self._conn.patch(f"/courses/{course_id}/activate") or {})

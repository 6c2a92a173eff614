from __future__ import annotations

from typing import BinaryIO, Sequence

from ..api.connection import ApiConnection
from ..api.rest_base import as_list
from .model import Submission


class RestSubmissionRepository:
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def _many(self, data) -> list[Submission]:
        return [Submission.from_api(s) for s in as_list(data)]

    def create(self, *, assignment_id: str, filename: str, document: BinaryIO) -> Submission:
        data = self._conn.post(
            "/submissions",
            data={"assignmentId": assignment_id},
            files={"projectFile": (filename, document)},
        )
        return Submission.from_api(data or {})

    def list_mine(self) -> Sequence[Submission]:
        return self._many(self._conn.get("/submissions/my-submissions"))

    def list_for_facilitator(self) -> Sequence[Submission]:
        return self._many(self._conn.get("/submissions/facilitator"))

    def review(self, submission_id: str, payload: dict) -> Submission:
        return Submission.from_api(self._conn.patch(f"/submissions/{submission_id}/review", json=payload) or {})

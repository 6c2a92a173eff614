from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..api.connection import ApiConnection
from ..api.rest_base import as_list
from ..core.exceptions import ApiError, SessionExpiredError
from .model import Program, ProgramStats

logger = logging.getLogger(__name__)


class RestProgramRepository:
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def _one(self, data) -> Program:
        return Program.from_api(data or {})

    def list_all(self) -> Sequence[Program]:
        return [Program.from_api(p) for p in as_list(self._conn.get("/programs"))]

    def list_archived(self) -> Sequence[Program]:
        return [Program.from_api(p) for p in as_list(self._conn.get("/programs/archived"))]

    def get_by_id(self, program_id: str) -> Program:
        return self._one(self._conn.get(f"/programs/{program_id}"))

    def create(self, payload: dict) -> Program:
        return self._one(self._conn.post("/programs", json=payload))

    def update(self, program_id: str, payload: dict) -> Program:
        return self._one(self._conn.put(f"/programs/{program_id}", json=payload))

    def delete(self, program_id: str) -> None:
        self._conn.delete(f"/programs/{program_id}")

    def request_approval(self, program_id: str) -> Program:
        return self._one(self._conn.patch(f"/programs/{program_id}/request-approval"))

    def approve(self, program_id: str) -> Program:
        return self._one(self._conn.patch(f"/programs/{program_id}/approve"))

    def reject(self, program_id: str, *, reason: str) -> Program:
        return self._one(self._conn.patch(f"/programs/{program_id}/reject", json={"reason": reason}))

    def enroll_trainee(self, program_id: str, trainee_id: str) -> Program:
        return self._one(self._conn.post(f"/programs/{program_id}/enroll-trainee", json={"traineeId": trainee_id}))

    def unenroll_trainee(self, program_id: str, trainee_id: str) -> Program:
        return self._one(self._conn.post(f"/programs/{program_id}/unenroll-trainee", json={"traineeId": trainee_id}))

    def enroll_facilitator(self, program_id: str, facilitator_id: str) -> Program:
        data = self._conn.post(f"/programs/{program_id}/enroll-facilitator", json={"facilitatorId": facilitator_id})
        return self._one(data)

    def assign_manager(self, program_id: str, manager_id: str) -> Program:
        return self._one(self._conn.patch(f"/programs/{program_id}/assign-manager", json={"managerId": manager_id}))

    def complete(self, program_id: str) -> Program:
        return self._one(self._conn.patch(f"/programs/{program_id}/complete"))

    def reactivate(self, program_id: str, *, new_end_date: str) -> Program:
        return self._one(self._conn.patch(f"/programs/{program_id}/reactivate", json={"newEndDate": new_end_date}))

    def archive(self, program_id: str) -> Program:
        return self._one(self._conn.patch(f"/programs/{program_id}/archive"))

    def unarchive(self, program_id: str) -> Program:
        return self._one(self._conn.patch(f"/programs/{program_id}/unarchive"))

    def get_stats(self, program_id: str) -> Optional[ProgramStats]:
        # a failure renders an empty stats card
        try:
            data = self._conn.get(f"/programs/{program_id}/stats")
        except SessionExpiredError:
            raise
        except ApiError as e:
            logger.warning("Failed to fetch stats for program %s: %s", program_id, e.message)
            return None
        return ProgramStats.from_api(data) if data else None

    def report_pdf(self, program_id: str) -> bytes:
        return self._conn.get(f"/programs/{program_id}/report/pdf", raw=True)

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Program, ProgramStats


class ProgramRepository(Protocol):
    def list_all(self) -> Sequence[Program]:
        """Programs visible to the signed-in user (the backend filters by role)."""

        raise NotImplementedError

    def list_archived(self) -> Sequence[Program]:
        raise NotImplementedError

    def get_by_id(self, program_id: str) -> Program:
        raise NotImplementedError

    def create(self, payload: dict) -> Program:
        raise NotImplementedError

    def update(self, program_id: str, payload: dict) -> Program:
        raise NotImplementedError

    def delete(self, program_id: str) -> None:
        raise NotImplementedError

    # Approval workflow
    def request_approval(self, program_id: str) -> Program:
        raise NotImplementedError

    def approve(self, program_id: str) -> Program:
        raise NotImplementedError

    def reject(self, program_id: str, *, reason: str) -> Program:
        raise NotImplementedError

    # Enrolment
    def enroll_trainee(self, program_id: str, trainee_id: str) -> Program:
        raise NotImplementedError

    def unenroll_trainee(self, program_id: str, trainee_id: str) -> Program:
        raise NotImplementedError

    def enroll_facilitator(self, program_id: str, facilitator_id: str) -> Program:
        raise NotImplementedError

    def assign_manager(self, program_id: str, manager_id: str) -> Program:
        raise NotImplementedError

    # Lifecycle
    def complete(self, program_id: str) -> Program:
        raise NotImplementedError

    def reactivate(self, program_id: str, *, new_end_date: str) -> Program:
        raise NotImplementedError

    def archive(self, program_id: str) -> Program:
        raise NotImplementedError

    def unarchive(self, program_id: str) -> Program:
        raise NotImplementedError

    def get_stats(self, program_id: str) -> Optional[ProgramStats]:
        raise NotImplementedError

    def report_pdf(self, program_id: str) -> bytes:
        raise NotImplementedError

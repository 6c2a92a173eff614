from __future__ import annotations

from typing import Protocol, Sequence

from .model import Assignment, ResendResult


class AssignmentRepository(Protocol):
    def list_mine(self) -> Sequence[Assignment]:
        raise NotImplementedError

    def list_available(self) -> Sequence[Assignment]:
        raise NotImplementedError

    def list_for_course(self, course_id: str) -> Sequence[Assignment]:
        raise NotImplementedError

    def list_for_program(self, program_id: str) -> Sequence[Assignment]:
        raise NotImplementedError

    def create(self, payload: dict) -> Assignment:
        raise NotImplementedError

    def update(self, assignment_id: str, payload: dict) -> Assignment:
        raise NotImplementedError

    def delete(self, assignment_id: str) -> None:
        raise NotImplementedError

    def resend_notifications(self, assignment_id: str) -> ResendResult:
        raise NotImplementedError

from __future__ import annotations

from typing import BinaryIO, Protocol, Sequence

from .model import Course


class CourseRepository(Protocol):
    def create(self, *, title: str, description: str, program_id: str, filename: str, document: BinaryIO) -> Course:
        """Multipart upload; the document goes up as ``courseDocument``."""

        raise NotImplementedError

    def list_mine(self) -> Sequence[Course]:
        raise NotImplementedError

    def list_for_program(self, program_id: str) -> Sequence[Course]:
        raise NotImplementedError

    def list_pending(self) -> Sequence[Course]:
        raise NotImplementedError

    def update(self, course_id: str, payload: dict) -> Course:
        raise NotImplementedError

    def delete(self, course_id: str) -> None:
        raise NotImplementedError

    def request_approval(self, course_id: str) -> Course:
        raise NotImplementedError

    def approve(self, course_id: str) -> Course:
        raise NotImplementedError

    def reject(self, course_id: str, *, reason: str) -> Course:
        raise NotImplementedError

    def activate(self, course_id: str) -> Course:
        raise NotImplementedError

from __future__ import annotations

from typing import BinaryIO, Protocol, Sequence

from .model import Submission


class SubmissionRepository(Protocol):
    def create(self, *, assignment_id: str, filename: str, document: BinaryIO) -> Submission:
        """Multipart upload; the file goes up as ``projectFile``."""

        raise NotImplementedError

    def list_mine(self) -> Sequence[Submission]:
        raise NotImplementedError

    def list_for_facilitator(self) -> Sequence[Submission]:
        raise NotImplementedError

    def review(self, submission_id: str, payload: dict) -> Submission:
        raise NotImplementedError

from __future__ import annotations

import logging
from typing import BinaryIO, Optional

from ..common.listing import count_by, filter_by_status, search
from ..common.validators import require_id
from ..core.enums import Role, SubmissionStatus, parse_enum
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Submission
from .repository import SubmissionRepository

logger = logging.getLogger(__name__)

REVIEW_OUTCOMES = frozenset({SubmissionStatus.REVIEWED, SubmissionStatus.NEEDS_REVISION})
MAX_GRADE = 100


def _grade(value) -> float:
    try:
        grade = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"A grade between 0 and {MAX_GRADE} is required")
    if not 0 <= grade <= MAX_GRADE:
        raise ValidationError(f"A grade between 0 and {MAX_GRADE} is required")
    return grade


class SubmissionService:
    def __init__(self, submissions: SubmissionRepository):
        self._submissions = submissions

    def submit(
        self,
        *,
        current_role: Role,
        assignment_id: str,
        filename: Optional[str],
        document: Optional[BinaryIO],
    ) -> Submission:
        """Upload (or replace) the trainee's project for an assignment.

        Replacing is refused once the earlier submission has been reviewed.
        """

        if current_role != Role.TRAINEE:
            raise AuthorizationError("Only trainees can submit projects")
        assignment_id = require_id(assignment_id, "Assignment")
        if document is None or not filename:
            raise ValidationError("Project file is required")

        earlier = next((s for s in self._submissions.list_mine() if s.assignment_id == assignment_id), None)
        if earlier is not None and earlier.locked:
            raise ValidationError("This submission has already been reviewed and cannot be replaced")

        submission = self._submissions.create(assignment_id=assignment_id, filename=filename, document=document)
        logger.info("Submission %s uploaded for assignment %s", submission.submission_id, assignment_id)
        return submission

    def my_submissions(self, *, status: Optional[str] = None) -> list[Submission]:
        return filter_by_status(self._submissions.list_mine(), status)

    def to_review(self, *, current_role: Role) -> list[Submission]:
        if current_role != Role.FACILITATOR:
            raise AuthorizationError("Only facilitators review submissions")
        return list(self._submissions.list_for_facilitator())

    @staticmethod
    def narrow(rows: list[Submission], *, status: Optional[str] = None, term: Optional[str] = None) -> list[Submission]:
        rows = filter_by_status(rows, status)
        return search(rows, term, fields=lambda s: (s.trainee_name, s.assignment_title, s.course_title))

    def review(
        self,
        *,
        current_role: Role,
        submission_id: str,
        status: Optional[str],
        feedback: Optional[str] = None,
        grade=None,
    ) -> Submission:
        if current_role != Role.FACILITATOR:
            raise AuthorizationError("Only facilitators review submissions")
        outcome = parse_enum(SubmissionStatus, status, None)
        if outcome not in REVIEW_OUTCOMES:
            raise ValidationError("Status must be Reviewed or NeedsRevision")

        payload: dict = {"status": outcome.value, "feedback": (feedback or "").strip()}
        if outcome == SubmissionStatus.REVIEWED:
            payload["grade"] = _grade(grade)
        elif grade not in (None, ""):
            raise ValidationError("A grade cannot be given when asking for a revision")
        elif not payload["feedback"]:
            raise ValidationError("Feedback is required when asking for a revision")

        return self._submissions.review(require_id(submission_id, "Submission"), payload)

    @staticmethod
    def stats(rows: list[Submission]) -> dict[str, int]:
        stats = count_by(rows, lambda s: s.status, keys=list(SubmissionStatus))
        stats["total"] = len(rows)
        return stats

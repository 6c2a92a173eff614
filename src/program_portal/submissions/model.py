from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..api.rest_base import parse_datetime, ref_id, ref_name
from ..core.enums import SubmissionStatus, parse_enum


def _title(value) -> str:
    return (value.get("title") if isinstance(value, dict) else None) or ""


@dataclass(frozen=True)
class Submission:
    """Domain entity: a trainee's project file for one assignment."""

    submission_id: str
    status: SubmissionStatus
    assignment_id: Optional[str] = None
    assignment_title: str = ""
    max_grade: Optional[int] = None
    trainee_id: Optional[str] = None
    trainee_name: str = ""
    trainee_email: str = ""
    program_name: str = ""
    course_title: str = ""
    file_url: Optional[str] = None
    submitted_at: Optional[datetime] = None
    feedback: str = ""
    grade: Optional[str] = None

    @property
    def locked(self) -> bool:
        """Reviewed or graded work can no longer be replaced."""
        return self.status in {SubmissionStatus.REVIEWED, SubmissionStatus.GRADED}

    @classmethod
    def from_api(cls, data: dict) -> "Submission":
        assignment = data.get("assignment")
        trainee = data.get("trainee")
        grade = data.get("grade")
        max_grade = assignment.get("maxGrade") if isinstance(assignment, dict) else None
        return cls(
            submission_id=str(data.get("_id") or ""),
            status=parse_enum(SubmissionStatus, data.get("status"), SubmissionStatus.SUBMITTED),
            assignment_id=ref_id(assignment),
            assignment_title=_title(assignment),
            max_grade=int(max_grade) if max_grade is not None else None,
            trainee_id=ref_id(trainee),
            trainee_name=ref_name(trainee),
            trainee_email=(trainee.get("email") if isinstance(trainee, dict) else None) or "",
            program_name=ref_name(data.get("program")),
            course_title=_title(data.get("course")),
            file_url=data.get("fileUrl"),
            submitted_at=parse_datetime(data.get("submittedAt")),
            feedback=data.get("feedback") or "",
            grade=str(grade) if grade not in (None, "") else None,
        )

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..api.rest_base import parse_datetime, ref_id, ref_name


@dataclass(frozen=True)
class Assignment:
    assignment_id: str
    title: str
    description: str
    due_date: Optional[datetime]
    program_id: Optional[str] = None
    program_name: str = ""
    course_id: Optional[str] = None
    course_title: str = ""
    roadmap_id: Optional[str] = None
    facilitator_id: Optional[str] = None
    facilitator_name: str = ""
    max_grade: int = 100
    is_active: bool = True
    sent_to_trainees: bool = False
    sent_to_trainees_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: dict) -> "Assignment":
        course = data.get("course")
        return cls(
            assignment_id=str(data.get("_id") or ""),
            title=data.get("title") or "",
            description=data.get("description") or "",
            due_date=parse_datetime(data.get("dueDate")),
            program_id=ref_id(data.get("program")),
            program_name=ref_name(data.get("program")),
            course_id=ref_id(course),
            course_title=(course.get("title") if isinstance(course, dict) else None) or "",
            roadmap_id=ref_id(data.get("roadmap")),
            facilitator_id=ref_id(data.get("facilitator")),
            facilitator_name=ref_name(data.get("facilitator")),
            max_grade=int(data.get("maxGrade") or 100),
            is_active=bool(data.get("isActive", True)),
            sent_to_trainees=bool(data.get("sentToTrainees", False)),
            sent_to_trainees_at=parse_datetime(data.get("sentToTraineesAt")),
        )


@dataclass(frozen=True)
class ResendResult:
    sent_count: int
    total_count: int

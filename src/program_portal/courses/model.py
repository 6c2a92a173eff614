from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..api.rest_base import parse_datetime, ref_id, ref_name
from ..core.enums import ApprovalStatus, parse_enum


@dataclass(frozen=True)
class Course:
    """Domain entity: course material a facilitator uploads for a program."""

    course_id: str
    title: str
    description: str
    status: ApprovalStatus
    program_id: Optional[str] = None
    program_name: str = ""
    facilitator_id: Optional[str] = None
    facilitator_name: str = ""
    content_url: Optional[str] = None
    file_type: Optional[str] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: dict) -> "Course":
        program = data.get("program") or data.get("programId")
        facilitator = data.get("facilitator") or data.get("facilitatorId")
        return cls(
            course_id=str(data.get("_id") or ""),
            title=data.get("title") or "",
            description=data.get("description") or "",
            status=parse_enum(ApprovalStatus, data.get("status"), ApprovalStatus.DRAFT),
            program_id=ref_id(program),
            program_name=ref_name(program),
            facilitator_id=ref_id(facilitator),
            facilitator_name=ref_name(facilitator),
            content_url=data.get("contentUrl"),
            file_type=data.get("type"),
            rejection_reason=data.get("rejectionReason"),
            created_at=parse_datetime(data.get("createdAt")),
        )

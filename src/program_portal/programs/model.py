from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..api.rest_base import parse_date, parse_datetime, ref_id, ref_list, ref_name
from ..core.enums import ProgramStatus, parse_enum


@dataclass(frozen=True)
class Program:
    """Domain entity: a training cohort."""

    program_id: str
    name: str
    description: str
    start_date: Optional[date]
    end_date: Optional[date]
    status: ProgramStatus
    rejection_reason: Optional[str] = None
    manager_id: Optional[str] = None
    manager_name: Optional[str] = None
    facilitator_ids: list[str] = field(default_factory=list)
    trainee_ids: list[str] = field(default_factory=list)
    category: Optional[str] = None
    is_active: bool = True
    is_archived: bool = False
    created_at: Optional[datetime] = None

    @property
    def trainee_count(self) -> int:
        return len(self.trainee_ids)

    @property
    def facilitator_count(self) -> int:
        return len(self.facilitator_ids)

    @classmethod
    def from_api(cls, data: dict) -> "Program":
        manager = data.get("programManager")
        return cls(
            program_id=str(data.get("_id") or ""),
            name=data.get("name") or "",
            description=data.get("description") or "",
            start_date=parse_date(data.get("startDate")),
            end_date=parse_date(data.get("endDate")),
            status=parse_enum(ProgramStatus, data.get("status"), ProgramStatus.DRAFT),
            rejection_reason=data.get("rejectionReason"),
            manager_id=ref_id(manager),
            manager_name=ref_name(manager, default="") or None,
            facilitator_ids=ref_list(data.get("facilitators")),
            trainee_ids=ref_list(data.get("trainees")),
            category=data.get("category"),
            is_active=bool(data.get("isActive", True)),
            is_archived=bool(data.get("isArchived", False)),
            created_at=parse_datetime(data.get("createdAt")),
        )


@dataclass(frozen=True)
class ProgramStats:
    total_enrolled: int = 0
    total_facilitators: int = 0
    overall_attendance_percentage: float = 0.0
    total_present_days: int = 0
    total_excused_days: int = 0
    total_eligible_days: int = 0

    @classmethod
    def from_api(cls, data: dict) -> "ProgramStats":
        return cls(
            total_enrolled=int(data.get("totalEnrolled") or 0),
            total_facilitators=int(data.get("totalFacilitators") or 0),
            overall_attendance_percentage=float(data.get("overallAttendancePercentage") or 0),
            total_present_days=int(data.get("totalPresentDays") or 0),
            total_excused_days=int(data.get("totalExcusedDays") or 0),
            total_eligible_days=int(data.get("totalEligibleDays") or 0),
        )

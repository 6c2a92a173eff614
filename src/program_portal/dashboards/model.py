from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DashboardStats:
    total_programs: int = 0
    active_trainees: int = 0
    total_users: int = 0
    pending_approvals: int = 0

    @classmethod
    def from_api(cls, data: dict) -> "DashboardStats":
        return cls(
            total_programs=int(data.get("totalPrograms") or 0),
            active_trainees=int(data.get("activeTrainees") or 0),
            total_users=int(data.get("totalUsers") or 0),
            pending_approvals=int(data.get("pendingApprovals") or 0),
        )


@dataclass(frozen=True)
class FacilitatorStats:
    assigned_programs: int = 0
    todays_sessions: int = 0
    pending_reviews: int = 0
    attendance_rate: float = 0.0
    total_students: int = 0

    @classmethod
    def from_api(cls, data: dict) -> "FacilitatorStats":
        return cls(
            assigned_programs=int(data.get("assignedPrograms") or 0),
            todays_sessions=int(data.get("todaysSessions") or 0),
            pending_reviews=int(data.get("pendingReviews") or 0),
            attendance_rate=float(data.get("attendanceRate") or 0),
            total_students=int(data.get("totalStudents") or 0),
        )

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..api.rest_base import parse_date, parse_datetime, ref_id, ref_name
from ..core.enums import AttendanceMethod, AttendanceStatus, SessionStatus, SessionType, parse_enum


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float
    radius_m: Optional[float] = None
    address: Optional[str] = None

    @classmethod
    def from_api(cls, data: Optional[dict]) -> Optional["GeoPoint"]:
        if not data or data.get("lat") is None or data.get("lng") is None:
            return None
        return cls(
            latitude=float(data["lat"]),
            longitude=float(data["lng"]),
            radius_m=float(data["radius"]) if data.get("radius") is not None else None,
            address=data.get("address"),
        )


@dataclass(frozen=True)
class ClassSession:
    """Domain entity: an attendance-taking class session.

    ``status`` is whatever the server last reported; the client never changes it.
    ``session_id`` is the public id used in action URLs, ``id`` the record id.
    """

    id: str
    session_id: str
    type: SessionType
    title: str
    status: SessionStatus
    start_time: Optional[datetime]
    duration: int
    program_id: Optional[str] = None
    program_name: str = ""
    facilitator_id: Optional[str] = None
    facilitator_name: str = ""
    description: Optional[str] = None
    access_link: Optional[str] = None
    meeting_link: Optional[str] = None
    qr_code_image: Optional[str] = None
    location: Optional[GeoPoint] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: dict, *, qr_code_image: Optional[str] = None) -> "ClassSession":
        return cls(
            id=str(data.get("_id") or ""),
            session_id=str(data.get("sessionId") or data.get("_id") or ""),
            type=parse_enum(SessionType, data.get("type"), SessionType.PHYSICAL),
            title=data.get("title") or "",
            status=parse_enum(SessionStatus, data.get("status"), SessionStatus.SCHEDULED),
            start_time=parse_datetime(data.get("startTime")),
            duration=int(data.get("duration") or 0),
            program_id=ref_id(data.get("programId")),
            program_name=ref_name(data.get("programId")),
            facilitator_id=ref_id(data.get("facilitatorId")),
            facilitator_name=ref_name(data.get("facilitatorId")),
            description=data.get("description"),
            access_link=data.get("accessLink"),
            meeting_link=data.get("meetingLink") or data.get("videoCallLink"),
            qr_code_image=qr_code_image or data.get("qrCodeImage"),
            location=GeoPoint.from_api(data.get("location")),
            updated_at=parse_datetime(data.get("updatedAt")),
        )


@dataclass(frozen=True)
class SessionDetails:
    session: ClassSession
    attendance_count: int = 0


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one trainee's attendance for one session."""

    record_id: str
    user_id: Optional[str]
    user_name: str
    session_id: Optional[str]
    session_title: str
    program_id: Optional[str]
    attendance_date: Optional[date]
    timestamp: Optional[datetime]
    method: Optional[AttendanceMethod]
    status: AttendanceStatus
    check_in: Optional[datetime] = None
    reason: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "AttendanceRecord":
        session = data.get("sessionId")
        return cls(
            record_id=str(data.get("_id") or ""),
            user_id=ref_id(data.get("userId")),
            user_name=ref_name(data.get("userId")),
            session_id=ref_id(session),
            session_title=(session.get("title") if isinstance(session, dict) else None)
            or data.get("sessionTitle")
            or "",
            program_id=ref_id(data.get("programId")),
            attendance_date=parse_date(data.get("date") or data.get("timestamp")),
            timestamp=parse_datetime(data.get("timestamp")),
            method=parse_enum(AttendanceMethod, data.get("method"), None),
            status=parse_enum(AttendanceStatus, data.get("status"), AttendanceStatus.PRESENT),
            check_in=parse_datetime(data.get("checkIn")),
            reason=data.get("reason"),
        )


@dataclass(frozen=True)
class StudentSummary:
    """Attendance of one student over a reporting window."""

    user_id: str
    name: str
    email: str = ""
    present: int = 0
    absent: int = 0
    late: int = 0
    excused: int = 0
    attendance_rate: float = 0.0
    records: list[dict] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "StudentSummary":
        return cls(
            user_id=str(data.get("userId") or ""),
            name=data.get("name") or "",
            email=data.get("email") or "",
            present=int(data.get("present") or 0),
            absent=int(data.get("absent") or 0),
            late=int(data.get("late") or 0),
            excused=int(data.get("excused") or 0),
            attendance_rate=float(data.get("attendanceRate") or 0),
            records=list(data.get("records") or []),
        )


@dataclass(frozen=True)
class MarkResult:
    method: AttendanceMethod
    message: str
    record: Optional[AttendanceRecord] = None

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.listing import count_by, filter_by_status, percentage
from ..common.validators import require_coordinates, require_id, require_non_empty, require_positive
from ..core.constants import DEFAULT_SESSION_DURATION_MINUTES
from ..core.enums import AttendanceMethod, AttendanceStatus, Role, SessionStatus, SessionType, parse_enum
from ..core.exceptions import AuthorizationError, ValidationError
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, ClassSession, MarkResult, SessionDetails, StudentSummary
from .qr import read_qr_payload
from .repository import AttendanceRepository
from .strategies.base import MarkRequest
from .workflow import SessionAction, SessionWorkflow

logger = logging.getLogger(__name__)

SESSION_RUNNERS = {Role.FACILITATOR}
REPORT_VIEWERS = {Role.SUPER_ADMIN, Role.PROGRAM_MANAGER}


@dataclass(frozen=True)
class NewSession:
    type: SessionType
    program_id: str
    title: str
    description: Optional[str]
    start_time: datetime
    duration: int

    def to_api(self) -> dict:
        payload = {
            "type": self.type.value,
            "programId": self.program_id,
            "title": self.title,
            "startTime": self.start_time.isoformat(),
            "duration": self.duration,
        }
        if self.description:
            payload["description"] = self.description
        return payload


@dataclass(frozen=True)
class StartedSession:
    session: ClassSession
    message: str


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._factory = strategy_factory or AttendanceStrategyFactory()

    # ------------------------------------------------------------------
    # Facilitator: sessions
    # ------------------------------------------------------------------

    @staticmethod
    def build_session(
        *,
        type: str,
        program_id: str,
        title: str,
        description: Optional[str] = None,
        start_time=None,
        duration=None,
    ) -> NewSession:
        """Validate the create-session form. Raises before any request is sent."""

        session_type = parse_enum(SessionType, (type or "").strip().lower(), None)
        if session_type is None:
            raise ValidationError("Session type must be online or physical")

        if isinstance(start_time, datetime):
            start = start_time
        elif start_time:
            text = str(start_time).strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            try:
                start = datetime.fromisoformat(text)
            except ValueError:
                raise ValidationError("Start time is not a valid date and time")
        else:
            start = now_utc()

        return NewSession(
            type=session_type,
            program_id=require_id(program_id, "Program"),
            title=require_non_empty(title, "Session title"),
            description=(description or "").strip() or None,
            start_time=start,
            duration=require_positive(
                DEFAULT_SESSION_DURATION_MINUTES if duration in (None, "") else duration, "Duration"
            ),
        )

    def create_session(self, *, current_role: Role, **form) -> ClassSession:
        if current_role not in SESSION_RUNNERS:
            raise AuthorizationError("Only facilitators can create sessions")
        new_session = self.build_session(**form)
        session = self._attendance.create_session(new_session.to_api())
        logger.info("Session %s created (%s)", session.session_id, session.type.value)
        return session

    def list_facilitator_sessions(self, *, status: Optional[str] = None) -> list[ClassSession]:
        return filter_by_status(self._attendance.list_facilitator_sessions(), status)

    def get_session_details(self, session_id: str) -> SessionDetails:
        return self._attendance.get_session(require_id(session_id, "Session"))

    def start_session(
        self,
        *,
        current_role: Role,
        session_id: str,
        session_type: Optional[str] = None,
        status: Optional[str] = None,
        latitude=None,
        longitude=None,
    ) -> StartedSession:
        """Ask the server to start a session; dispatches on the session type.

        When the caller does not know the session's type/status they are looked up first.
        """

        if current_role not in SESSION_RUNNERS:
            raise AuthorizationError("Only facilitators can start sessions")
        session_id = require_id(session_id, "Session")

        kind = parse_enum(SessionType, session_type, None)
        known_status = parse_enum(SessionStatus, status, None)
        if kind is None or known_status is None:
            current = self._attendance.get_session(session_id).session
            kind = current.type
            SessionWorkflow.ensure_allowed(current, SessionAction.START)
        elif known_status != SessionStatus.SCHEDULED:
            raise ValidationError(f"Cannot start a {known_status.value} session")

        if kind == SessionType.ONLINE:
            started = self._attendance.start_online(session_id)
            return StartedSession(session=started, message="Online session started. QR code is ready.")

        lat, lng = require_coordinates(latitude, longitude)
        started = self._attendance.start_physical(session_id, latitude=lat, longitude=lng)
        return StartedSession(session=started, message="Physical session is now active for attendance.")

    def open_qr(self, *, current_role: Role, session_id: str) -> str:
        if current_role not in SESSION_RUNNERS:
            raise AuthorizationError("Only facilitators can display the session QR code")
        return self._attendance.open_qr(require_id(session_id, "Session"))

    def end_session(self, *, current_role: Role, session_id: str) -> ClassSession:
        if current_role not in SESSION_RUNNERS:
            raise AuthorizationError("Only facilitators can end sessions")
        return self._attendance.end_session(require_id(session_id, "Session"))

    def session_attendance(self, session_id: str) -> list[AttendanceRecord]:
        return list(self._attendance.session_attendance(require_id(session_id, "Session")))

    # ------------------------------------------------------------------
    # Marking attendance
    # ------------------------------------------------------------------

    def mark_attendance(
        self,
        *,
        current_role: Role,
        method: Optional[str] = None,
        session: Optional[ClassSession] = None,
        session_type: Optional[str] = None,
        session_id: Optional[str] = None,
        qr_data: Optional[str] = None,
        latitude=None,
        longitude=None,
        user_id: Optional[str] = None,
        status: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> MarkResult:
        """Mark attendance with the capability the session calls for.

        One request per attempt; a failure is reported to the caller as-is.
        """

        requested = None
        if method:
            requested = parse_enum(AttendanceMethod, method, None)
            if requested is None:
                raise ValidationError("Unknown attendance method")

        strategy = self._factory.for_session(
            session=session,
            session_type=parse_enum(SessionType, session_type, None),
            requested=requested,
        )

        if strategy.method == AttendanceMethod.MANUAL:
            if current_role not in SESSION_RUNNERS:
                raise AuthorizationError("Only facilitators can mark attendance manually")
        elif current_role != Role.TRAINEE:
            raise AuthorizationError("Only trainees can check in to a session")

        if session is not None and not SessionWorkflow.accepts_attendance(session):
            raise ValidationError("This session is not accepting attendance")

        mark_status = AttendanceStatus.PRESENT
        if status:
            mark_status = parse_enum(AttendanceStatus, status, None)
            if mark_status is None:
                raise ValidationError("Unknown attendance status")

        request = MarkRequest(
            session_id=session_id or (session.session_id if session else None),
            qr_data=qr_data,
            latitude=latitude,
            longitude=longitude,
            user_id=user_id,
            status=mark_status,
            reason=reason,
        )
        result = strategy.mark(self._attendance, request)
        logger.info("Attendance marked via %s", result.method.value)
        return result

    def mark_in_session(self, *, current_role: Role, session_id: Optional[str], **mark) -> MarkResult:
        """Mark attendance for a session from the caller's own session list.

        The row is the session as the caller's dashboard lists it; it picks the
        default method and refuses sessions that are not active.
        """

        session_id = require_id(session_id, "Session")
        if current_role in SESSION_RUNNERS:
            rows = self._attendance.list_facilitator_sessions()
        else:
            rows = self._attendance.list_trainee_sessions()
        session = next((s for s in rows if s.session_id == session_id), None)
        if session is None:
            raise ValidationError("Session not found")
        return self.mark_attendance(current_role=current_role, session=session, session_id=session_id, **mark)

    def mark_with_qr_image(self, *, current_role: Role, image) -> MarkResult:
        qr_data = read_qr_payload(image)
        return self.mark_attendance(current_role=current_role, method=AttendanceMethod.QR_CODE.value, qr_data=qr_data)

    # ------------------------------------------------------------------
    # Trainee
    # ------------------------------------------------------------------

    def list_trainee_sessions(self, *, status: Optional[str] = None) -> list[ClassSession]:
        return filter_by_status(self._attendance.list_trainee_sessions(), status)

    def my_history(self, *, status: Optional[str] = None) -> list[AttendanceRecord]:
        records = sorted(
            self._attendance.my_history(),
            key=lambda r: r.timestamp.timestamp() if r.timestamp else float("-inf"),
            reverse=True,
        )
        return filter_by_status(records, status)

    # ------------------------------------------------------------------
    # Manager reporting
    # ------------------------------------------------------------------

    def program_report(
        self, *, current_role: Role, program_id: str, start_date: date, end_date: date
    ) -> list[AttendanceRecord]:
        if current_role not in REPORT_VIEWERS:
            raise AuthorizationError("You do not have access to attendance reports")
        if end_date < start_date:
            raise ValidationError("End date must be on or after the start date")
        return list(
            self._attendance.program_report(require_id(program_id, "Program"), start_date=start_date, end_date=end_date)
        )

    def program_summary(
        self, *, current_role: Role, program_id: str, start_date: date, end_date: date
    ) -> tuple[int, list[StudentSummary]]:
        if current_role not in REPORT_VIEWERS:
            raise AuthorizationError("You do not have access to attendance reports")
        if end_date < start_date:
            raise ValidationError("End date must be on or after the start date")
        total, report = self._attendance.program_summary(
            require_id(program_id, "Program"), start_date=start_date, end_date=end_date
        )
        return total, sorted(report, key=lambda s: s.attendance_rate)

    # ------------------------------------------------------------------
    # Stats over fetched rows
    # ------------------------------------------------------------------

    @staticmethod
    def session_stats(sessions: list[ClassSession]) -> dict[str, int]:
        stats = count_by(sessions, lambda s: s.status, keys=list(SessionStatus))
        stats["total"] = len(sessions)
        return stats

    @staticmethod
    def record_stats(records: list[AttendanceRecord]) -> dict:
        stats = count_by(records, lambda r: r.status, keys=list(AttendanceStatus))
        attended = stats[AttendanceStatus.PRESENT.value] + stats[AttendanceStatus.LATE.value]
        return {
            "total": len(records),
            "present": stats[AttendanceStatus.PRESENT.value],
            "late": stats[AttendanceStatus.LATE.value],
            "absent": stats[AttendanceStatus.ABSENT.value],
            "excused": stats[AttendanceStatus.EXCUSED.value],
            "attendance_rate": percentage(attended, len(records)),
        }

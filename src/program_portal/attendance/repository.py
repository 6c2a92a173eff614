from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, ClassSession, SessionDetails, StudentSummary


class AttendanceRepository(Protocol):
    # Facilitator: sessions
    def create_session(self, payload: dict) -> ClassSession:
        raise NotImplementedError

    def list_facilitator_sessions(self) -> Sequence[ClassSession]:
        raise NotImplementedError

    def get_session(self, session_id: str) -> SessionDetails:
        raise NotImplementedError

    def start_online(self, session_id: str) -> ClassSession:
        """The returned session carries the QR image the server generated."""

        raise NotImplementedError

    def start_physical(self, session_id: str, *, latitude: float, longitude: float) -> ClassSession:
        raise NotImplementedError

    def open_qr(self, session_id: str) -> str:
        raise NotImplementedError

    def end_session(self, session_id: str) -> ClassSession:
        raise NotImplementedError

    def session_attendance(self, session_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    # Marking: one endpoint per capability
    def mark_qr(self, *, qr_data: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def mark_geolocation(self, *, session_id: str, latitude: float, longitude: float) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def mark_manual(
        self,
        *,
        session_id: str,
        user_id: str,
        status: AttendanceStatus,
        reason: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    # Trainee
    def list_trainee_sessions(self) -> Sequence[ClassSession]:
        raise NotImplementedError

    def my_history(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    # Manager reporting
    def program_report(self, program_id: str, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def program_summary(
        self, program_id: str, *, start_date: date, end_date: date
    ) -> tuple[int, Sequence[StudentSummary]]:
        """Return ``(total_sessions, per-student summaries)``."""

        raise NotImplementedError

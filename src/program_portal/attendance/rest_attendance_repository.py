from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..api.connection import ApiConnection
from ..api.rest_base import as_list
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, ClassSession, SessionDetails, StudentSummary


def _record_or_none(data) -> Optional[AttendanceRecord]:
    if isinstance(data, dict) and data.get("_id"):
        return AttendanceRecord.from_api(data)
    return None


class RestAttendanceRepository:
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def create_session(self, payload: dict) -> ClassSession:
        return ClassSession.from_api(self._conn.post("/attendance/sessions", json=payload) or {})

    def list_facilitator_sessions(self) -> Sequence[ClassSession]:
        return [ClassSession.from_api(s) for s in as_list(self._conn.get("/attendance/facilitator/sessions"))]

    def get_session(self, session_id: str) -> SessionDetails:
        data = self._conn.get(f"/attendance/sessions/{session_id}") or {}
        session = data.get("session") if isinstance(data.get("session"), dict) else data
        return SessionDetails(
            session=ClassSession.from_api(session),
            attendance_count=int(data.get("attendanceCount") or 0),
        )

    def start_online(self, session_id: str) -> ClassSession:
        data = self._conn.post(f"/attendance/sessions/{session_id}/start-online") or {}
        session = data.get("session") if isinstance(data.get("session"), dict) else data
        return ClassSession.from_api(session, qr_code_image=data.get("qrCode") or data.get("qrCodeImage"))

    def start_physical(self, session_id: str, *, latitude: float, longitude: float) -> ClassSession:
        data = self._conn.post(
            f"/attendance/sessions/{session_id}/start-physical",
            json={"latitude": latitude, "longitude": longitude},
        ) or {}
        session = data.get("session") if isinstance(data.get("session"), dict) else data
        return ClassSession.from_api(session)

    def open_qr(self, session_id: str) -> str:
        data = self._conn.post(f"/attendance/sessions/{session_id}/open-qr") or {}
        return data.get("qrCodeImage") or data.get("qrCode") or ""

    def end_session(self, session_id: str) -> ClassSession:
        return ClassSession.from_api(self._conn.post(f"/attendance/sessions/{session_id}/end") or {})

    def session_attendance(self, session_id: str) -> Sequence[AttendanceRecord]:
        data = self._conn.get(f"/attendance/sessions/{session_id}/attendance")
        return [AttendanceRecord.from_api(r) for r in as_list(data)]

    def mark_qr(self, *, qr_data: str) -> Optional[AttendanceRecord]:
        return _record_or_none(self._conn.post("/attendance/qr-attendance", json={"qrData": qr_data}))

    def mark_geolocation(self, *, session_id: str, latitude: float, longitude: float) -> Optional[AttendanceRecord]:
        data = self._conn.post(
            "/attendance/geolocation-attendance",
            json={"sessionId": session_id, "latitude": latitude, "longitude": longitude},
        )
        return _record_or_none(data)

    def mark_manual(
        self,
        *,
        session_id: str,
        user_id: str,
        status: AttendanceStatus,
        reason: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        body = {"sessionId": session_id, "userId": user_id, "status": status.value}
        if reason:
            body["reason"] = reason
        return _record_or_none(self._conn.post("/attendance/mark", json=body))

    def list_trainee_sessions(self) -> Sequence[ClassSession]:
        return [ClassSession.from_api(s) for s in as_list(self._conn.get("/attendance/trainee/sessions"))]

    def my_history(self) -> Sequence[AttendanceRecord]:
        return [AttendanceRecord.from_api(r) for r in as_list(self._conn.get("/attendance/my-history"))]

    def program_report(self, program_id: str, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        data = self._conn.get(
            f"/attendance/report/program/{program_id}",
            params={"startDate": start_date.isoformat(), "endDate": end_date.isoformat()},
        )
        return [AttendanceRecord.from_api(r) for r in as_list(data)]

    def program_summary(
        self, program_id: str, *, start_date: date, end_date: date
    ) -> tuple[int, Sequence[StudentSummary]]:
        data = self._conn.get(
            f"/attendance/report/program/{program_id}/summary",
            params={"startDate": start_date.isoformat(), "endDate": end_date.isoformat()},
        ) or {}
        report = [StudentSummary.from_api(s) for s in as_list(data.get("report"))]
        return int(data.get("totalSessions") or 0), report

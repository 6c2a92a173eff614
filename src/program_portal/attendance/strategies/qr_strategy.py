from __future__ import annotations

from dataclasses import replace

from ...common.validators import require_non_empty
from ...core.enums import AttendanceMethod
from ..model import MarkResult
from ..repository import AttendanceRepository
from .base import AttendanceStrategy, MarkRequest


class QRCodeStrategy(AttendanceStrategy):
    """Trainee scans the session QR code; the payload identifies the session."""

    method = AttendanceMethod.QR_CODE

    def validate(self, request: MarkRequest) -> MarkRequest:
        return replace(request, qr_data=require_non_empty(request.qr_data, "QR code"))

    def submit(self, attendance: AttendanceRepository, request: MarkRequest) -> MarkResult:
        record = attendance.mark_qr(qr_data=request.qr_data)
        return MarkResult(method=self.method, message="Attendance marked with QR code.", record=record)

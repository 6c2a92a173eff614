from __future__ import annotations

from dataclasses import replace

from ...common.validators import require_id
from ...core.enums import AttendanceMethod, AttendanceStatus
from ...core.exceptions import ValidationError
from ..model import MarkResult
from ..repository import AttendanceRepository
from .base import AttendanceStrategy, MarkRequest


class ManualStrategy(AttendanceStrategy):
    """Facilitator records a trainee's status by hand."""

    method = AttendanceMethod.MANUAL

    def validate(self, request: MarkRequest) -> MarkRequest:
        reason = (request.reason or "").strip() or None
        if request.status == AttendanceStatus.EXCUSED and not reason:
            raise ValidationError("A reason is required for an excused absence")
        return replace(
            request,
            session_id=require_id(request.session_id, "Session"),
            user_id=require_id(request.user_id, "Trainee"),
            reason=reason,
        )

    def submit(self, attendance: AttendanceRepository, request: MarkRequest) -> MarkResult:
        record = attendance.mark_manual(
            session_id=request.session_id,
            user_id=request.user_id,
            status=request.status,
            reason=request.reason,
        )
        return MarkResult(method=self.method, message=f"Marked {request.status.value}.", record=record)

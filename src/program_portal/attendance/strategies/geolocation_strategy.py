from __future__ import annotations

from dataclasses import replace

from ...common.validators import require_coordinates, require_id
from ...core.enums import AttendanceMethod
from ..model import MarkResult
from ..repository import AttendanceRepository
from .base import AttendanceStrategy, MarkRequest


class GeolocationStrategy(AttendanceStrategy):
    """Trainee shares a position; the server checks it against the class radius."""

    method = AttendanceMethod.GEOLOCATION

    def validate(self, request: MarkRequest) -> MarkRequest:
        lat, lng = require_coordinates(request.latitude, request.longitude)
        return replace(request, session_id=require_id(request.session_id, "Session"), latitude=lat, longitude=lng)

    def submit(self, attendance: AttendanceRepository, request: MarkRequest) -> MarkResult:
        record = attendance.mark_geolocation(
            session_id=request.session_id,
            latitude=request.latitude,
            longitude=request.longitude,
        )
        return MarkResult(method=self.method, message="Attendance marked with your location.", record=record)

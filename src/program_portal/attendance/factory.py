from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceMethod, SessionType
from .model import ClassSession
from .strategies.base import AttendanceStrategy
from .strategies.geolocation_strategy import GeolocationStrategy
from .strategies.manual_strategy import ManualStrategy
from .strategies.qr_strategy import QRCodeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the marking capability for a session."""

    def for_method(self, method: AttendanceMethod) -> AttendanceStrategy:
        if method == AttendanceMethod.QR_CODE:
            return QRCodeStrategy()
        if method == AttendanceMethod.GEOLOCATION:
            return GeolocationStrategy()
        return ManualStrategy()

    def for_session(
        self,
        *,
        session: Optional[ClassSession] = None,
        session_type: Optional[SessionType] = None,
        requested: Optional[AttendanceMethod] = None,
    ) -> AttendanceStrategy:
        if requested:
            return self.for_method(requested)

        kind = session.type if session else session_type
        if kind == SessionType.ONLINE:
            return QRCodeStrategy()
        if kind == SessionType.PHYSICAL:
            return GeolocationStrategy()
        # Without a session the QR payload itself carries the session id.
        return QRCodeStrategy()

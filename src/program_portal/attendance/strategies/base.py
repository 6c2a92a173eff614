from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceMethod, AttendanceStatus
from ..model import MarkResult
from ..repository import AttendanceRepository


@dataclass(frozen=True)
class MarkRequest:
    """Everything a marking attempt may carry; each strategy reads its own part."""

    session_id: Optional[str] = None
    qr_data: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    user_id: Optional[str] = None
    status: AttendanceStatus = AttendanceStatus.PRESENT
    reason: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: one way of marking attendance, bound to one endpoint."""

    method: AttendanceMethod

    @abstractmethod
    def validate(self, request: MarkRequest) -> MarkRequest:
        """Return the cleaned request or raise ValidationError. No I/O."""

        raise NotImplementedError

    @abstractmethod
    def submit(self, attendance: AttendanceRepository, request: MarkRequest) -> MarkResult:
        raise NotImplementedError

    def mark(self, attendance: AttendanceRepository, request: MarkRequest) -> MarkResult:
        return self.submit(attendance, self.validate(request))

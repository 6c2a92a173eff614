from __future__ import annotations

from enum import Enum
from typing import Sequence

from ..core.enums import SessionStatus, SessionType
from ..core.exceptions import ValidationError
from .model import ClassSession


class SessionAction(str, Enum):
    START = "start"
    OPEN_QR = "open_qr"
    END = "end"


TERMINAL_STATUSES = frozenset({SessionStatus.COMPLETED, SessionStatus.CANCELLED})


class SessionWorkflow:
    """Client view of the server-owned session lifecycle.

    scheduled -> active -> completed, or cancelled before completion. The
    client only decides which actions to offer for the status it last saw;
    the transition itself happens on the server and is reflected back.
    """

    @staticmethod
    def available_actions(session: ClassSession) -> list[SessionAction]:
        if session.status == SessionStatus.SCHEDULED:
            return [SessionAction.START]
        if session.status == SessionStatus.ACTIVE:
            actions = [SessionAction.END]
            if session.type == SessionType.ONLINE:
                actions.insert(0, SessionAction.OPEN_QR)
            return actions
        return []

    @classmethod
    def ensure_allowed(cls, session: ClassSession, action: SessionAction) -> None:
        if action not in cls.available_actions(session):
            raise ValidationError(f"Cannot {action.value.replace('_', ' ')} a {session.status.value} session")

    @staticmethod
    def accepts_attendance(session: ClassSession) -> bool:
        return session.status == SessionStatus.ACTIVE

    @staticmethod
    def reflect(sessions: Sequence[ClassSession], updated: ClassSession) -> list[ClassSession]:
        """Replace the row with the server echo, or prepend it when new."""

        out = list(sessions)
        for i, s in enumerate(out):
            if s.id == updated.id:
                out[i] = updated
                return out
        return [updated, *out]

from dataclasses import replace

import pytest

from program_portal.attendance.model import ClassSession
from program_portal.attendance.workflow import SessionAction, SessionWorkflow
from program_portal.core.enums import SessionStatus
from program_portal.core.exceptions import ValidationError


def _session(sid: str, *, kind: str = "online", status: str = "scheduled") -> ClassSession:
    return ClassSession.from_api({"_id": sid, "sessionId": f"S-{sid}", "type": kind, "status": status, "title": sid})


@pytest.mark.parametrize(
    "kind,status,expected",
    [
        ("online", "scheduled", [SessionAction.START]),
        ("physical", "scheduled", [SessionAction.START]),
        ("online", "active", [SessionAction.OPEN_QR, SessionAction.END]),
        ("physical", "active", [SessionAction.END]),
        ("online", "completed", []),
        ("physical", "cancelled", []),
    ],
)
def test_available_actions_follow_reported_status(kind, status, expected):
    assert SessionWorkflow.available_actions(_session("a", kind=kind, status=status)) == expected


def test_ensure_allowed_rejects_ending_a_scheduled_session():
    with pytest.raises(ValidationError):
        SessionWorkflow.ensure_allowed(_session("a"), SessionAction.END)


def test_reflect_replaces_matching_row_with_server_echo():
    rows = [_session("a"), _session("b"), _session("c")]
    echoed = replace(rows[1], status=SessionStatus.ACTIVE)

    out = SessionWorkflow.reflect(rows, echoed)

    assert [s.id for s in out] == ["a", "b", "c"]
    assert out[1].status == SessionStatus.ACTIVE
    assert rows[1].status == SessionStatus.SCHEDULED


def test_reflect_prepends_unknown_session():
    rows = [_session("a")]

    out = SessionWorkflow.reflect(rows, _session("new"))

    assert [s.id for s in out] == ["new", "a"]


def test_only_active_sessions_accept_attendance():
    assert SessionWorkflow.accepts_attendance(_session("a", status="active"))
    assert not SessionWorkflow.accepts_attendance(_session("a", status="completed"))

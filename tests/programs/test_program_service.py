from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from program_portal.core.enums import ProgramStatus, Role
from program_portal.core.exceptions import ApiError, AuthorizationError, SessionExpiredError, ValidationError
from program_portal.programs.model import Program
from program_portal.programs.rest_program_repository import RestProgramRepository
from program_portal.programs.service import ProgramService


def _program(pid: str, status: ProgramStatus = ProgramStatus.DRAFT, **kw) -> Program:
    return Program(
        program_id=pid,
        name=kw.pop("name", f"Program {pid}"),
        description=kw.pop("description", ""),
        start_date=kw.pop("start_date", date(2025, 1, 6)),
        end_date=kw.pop("end_date", date(2025, 6, 30)),
        status=status,
        **kw,
    )


class InMemoryPrograms:
    def __init__(self, programs=()):
        self.programs = {p.program_id: p for p in programs}
        self.calls: list[tuple] = []

    def list_all(self):
        return list(self.programs.values())

    def get_by_id(self, program_id):
        return self.programs[program_id]

    def create(self, payload):
        self.calls.append(("create", payload))
        program = Program.from_api({"_id": "new", **payload})
        self.programs[program.program_id] = program
        return program

    def update(self, program_id, payload):
        self.calls.append(("update", program_id, payload))
        return self.programs[program_id]

    def request_approval(self, program_id):
        self.calls.append(("request_approval", program_id))
        return replace(self.programs[program_id], status=ProgramStatus.PENDING_APPROVAL)

    def reject(self, program_id, *, reason):
        self.calls.append(("reject", program_id, reason))
        return replace(self.programs[program_id], status=ProgramStatus.REJECTED, rejection_reason=reason)

    def reactivate(self, program_id, *, new_end_date):
        self.calls.append(("reactivate", program_id, new_end_date))
        return replace(self.programs[program_id], status=ProgramStatus.ACTIVE)


def test_create_rejects_blank_name_and_reversed_dates_without_a_request():
    repo = InMemoryPrograms()
    service = ProgramService(repo)

    with pytest.raises(ValidationError):
        service.create_program(
            current_role=Role.PROGRAM_MANAGER, name=" ", description="", start_date="2025-01-01", end_date="2025-02-01"
        )
    with pytest.raises(ValidationError):
        service.create_program(
            current_role=Role.PROGRAM_MANAGER, name="Cohort", description="", start_date="2025-03-01", end_date="2025-02-01"
        )

    assert repo.calls == []


def test_create_sends_iso_dates():
    repo = InMemoryPrograms()

    program = ProgramService(repo).create_program(
        current_role=Role.SUPER_ADMIN,
        name=" Data Cohort ",
        description="Evening track",
        start_date="2025-01-06",
        end_date="2025-01-06",
    )

    assert repo.calls == [
        (
            "create",
            {"name": "Data Cohort", "description": "Evening track", "startDate": "2025-01-06", "endDate": "2025-01-06"},
        )
    ]
    assert program.start_date == date(2025, 1, 6)


def test_trainees_cannot_create_programs():
    with pytest.raises(AuthorizationError):
        ProgramService(InMemoryPrograms()).create_program(
            current_role=Role.TRAINEE, name="x", description="", start_date="2025-01-01", end_date="2025-01-02"
        )


def test_reject_requires_a_reason():
    repo = InMemoryPrograms([_program("p1", ProgramStatus.PENDING_APPROVAL)])
    service = ProgramService(repo)

    with pytest.raises(ValidationError):
        service.reject(current_role=Role.SUPER_ADMIN, program_id="p1", reason="  ")
    rejected = service.reject(current_role=Role.SUPER_ADMIN, program_id="p1", reason="Budget not approved")

    assert rejected.status == ProgramStatus.REJECTED
    assert repo.calls == [("reject", "p1", "Budget not approved")]


@pytest.mark.parametrize(
    "action, role",
    [("request_approval", Role.SUPER_ADMIN), ("approve", Role.PROGRAM_MANAGER)],
)
def test_approval_steps_are_role_bound(action, role):
    service = ProgramService(InMemoryPrograms([_program("p1")]))

    with pytest.raises(AuthorizationError):
        getattr(service, action)(current_role=role, program_id="p1")


def test_request_approval_reflects_server_status():
    service = ProgramService(InMemoryPrograms([_program("p1")]))

    program = service.request_approval(current_role=Role.PROGRAM_MANAGER, program_id="p1")

    assert program.status == ProgramStatus.PENDING_APPROVAL


def test_reactivate_needs_end_date_after_start():
    repo = InMemoryPrograms([_program("p1", ProgramStatus.COMPLETED, start_date=date(2025, 1, 6))])
    service = ProgramService(repo)

    with pytest.raises(ValidationError):
        service.reactivate(current_role=Role.PROGRAM_MANAGER, program_id="p1", new_end_date="2024-12-31")
    with pytest.raises(ValidationError):
        service.reactivate(current_role=Role.PROGRAM_MANAGER, program_id="p1", new_end_date="2025-01-06")
    service.reactivate(current_role=Role.PROGRAM_MANAGER, program_id="p1", new_end_date="2025-09-30")

    assert repo.calls == [("reactivate", "p1", "2025-09-30")]


def test_update_with_nothing_to_change_is_rejected():
    with pytest.raises(ValidationError):
        ProgramService(InMemoryPrograms([_program("p1")])).update_program(
            current_role=Role.PROGRAM_MANAGER, program_id="p1"
        )


def test_listing_filters_and_searches_fetched_programs():
    repo = InMemoryPrograms(
        [
            _program("p1", ProgramStatus.ACTIVE, name="Data Science"),
            _program("p2", ProgramStatus.DRAFT, name="Data Engineering"),
            _program("p3", ProgramStatus.ACTIVE, name="Design"),
        ]
    )
    service = ProgramService(repo)

    active = service.list_programs(status="Active")
    active_data = service.list_programs(status="Active", term="data")
    counts = service.status_counts(repo.list_all())

    assert [p.program_id for p in active] == ["p1", "p3"]
    assert [p.program_id for p in active_data] == ["p1"]
    assert counts["Active"] == 2
    assert counts["Draft"] == 1
    assert counts["Rejected"] == 0
    assert service.list_pending_approval() == []


def test_rest_program_parses_populated_manager(conn, http):
    http.route(
        "GET",
        "/programs/p1",
        data={
            "_id": "p1",
            "name": "Data Science",
            "status": "Active",
            "startDate": "2025-01-06T00:00:00.000Z",
            "endDate": "2025-06-30T00:00:00.000Z",
            "programManager": {"_id": "m1", "name": "Maya"},
            "trainees": [{"_id": "t1"}, "t2"],
            "facilitators": ["f1"],
        },
    )

    program = RestProgramRepository(conn).get_by_id("p1")

    assert program.manager_id == "m1"
    assert program.manager_name == "Maya"
    assert program.trainee_count == 2
    assert program.facilitator_count == 1
    assert program.end_date == date(2025, 6, 30)


def test_rest_stats_failure_gives_none(conn, http):
    http.route("GET", "/programs/p1/stats", status=500, body={"message": "boom"})

    assert RestProgramRepository(conn).get_stats("p1") is None


def test_rest_stats_still_raise_when_the_session_expired(conn, http):
    http.route("GET", "/programs/p1/stats", status=401, body={"message": "jwt expired"})

    with pytest.raises(SessionExpiredError):
        RestProgramRepository(conn).get_stats("p1")


def test_rest_reject_sends_reason_and_surfaces_server_message(conn, http):
    http.route("PATCH", "/programs/p1/reject", status=400, body={"message": "Program is not pending"})

    with pytest.raises(ApiError) as excinfo:
        RestProgramRepository(conn).reject("p1", reason="No budget")

    assert excinfo.value.message == "Program is not pending"
    assert http.calls[0]["json"] == {"reason": "No budget"}

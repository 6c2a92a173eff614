from __future__ import annotations

import pytest

from program_portal.assignments.model import Assignment
from program_portal.assignments.rest_assignment_repository import RestAssignmentRepository
from program_portal.assignments.service import AssignmentService
from program_portal.core.enums import Role
from program_portal.core.exceptions import AuthorizationError, ValidationError


class InMemoryAssignments:
    def __init__(self):
        self.created: list[dict] = []

    def list_mine(self):
        return [
            Assignment.from_api({"_id": "a2", "title": "Joins", "dueDate": "2025-04-10T00:00:00Z"}),
            Assignment.from_api({"_id": "a3", "title": "Draft"}),
            Assignment.from_api({"_id": "a1", "title": "Select", "dueDate": "2025-04-01T00:00:00Z"}),
        ]

    def list_available(self):
        return self.list_mine()[:1]

    def create(self, payload):
        self.created.append(payload)
        return Assignment.from_api({"_id": "new", **payload})


def _form(**overrides):
    form = {
        "title": "Window functions",
        "description": "Rank the sales table",
        "program_id": "p1",
        "course_id": "c1",
        "roadmap_id": "w1",
        "due_date": "2025-04-15T17:00:00Z",
        "max_grade": "50",
    }
    form.update(overrides)
    return form


def test_my_assignments_by_role_sorted_by_due_date():
    service = AssignmentService(InMemoryAssignments())

    mine = service.my_assignments(current_role=Role.FACILITATOR)

    assert [a.assignment_id for a in mine] == ["a1", "a2", "a3"]
    assert len(service.my_assignments(current_role=Role.TRAINEE)) == 1
    with pytest.raises(AuthorizationError):
        service.my_assignments(current_role=Role.IT_SUPPORT)


def test_create_assignment_payload():
    repo = InMemoryAssignments()

    AssignmentService(repo).create_assignment(current_role=Role.FACILITATOR, **_form())

    assert repo.created == [
        {
            "title": "Window functions",
            "description": "Rank the sales table",
            "program": "p1",
            "course": "c1",
            "roadmap": "w1",
            "dueDate": "2025-04-15T17:00:00+00:00",
            "maxGrade": 50,
        }
    ]


@pytest.mark.parametrize("overrides", [{"due_date": None}, {"due_date": "someday"}, {"max_grade": 0}, {"course_id": ""}])
def test_invalid_assignment_is_rejected_locally(overrides):
    repo = InMemoryAssignments()

    with pytest.raises(ValidationError):
        AssignmentService(repo).create_assignment(current_role=Role.FACILITATOR, **_form(**overrides))

    assert repo.created == []


def test_rest_resend_reports_counts(conn, http):
    http.route("POST", "/assignments/a1/resend-notifications", data={"sentCount": 18, "totalCount": 20})

    result = AssignmentService(RestAssignmentRepository(conn)).resend_notifications(
        current_role=Role.FACILITATOR, assignment_id="a1"
    )

    assert (result.sent_count, result.total_count) == (18, 20)

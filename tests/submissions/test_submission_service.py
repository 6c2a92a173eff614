from __future__ import annotations

import io

import pytest

from program_portal.core.enums import Role, SubmissionStatus
from program_portal.core.exceptions import AuthorizationError, ValidationError
from program_portal.submissions.model import Submission
from program_portal.submissions.rest_submission_repository import RestSubmissionRepository
from program_portal.submissions.service import SubmissionService


class InMemorySubmissions:
    def __init__(self, mine=(), queue=()):
        self.mine = list(mine)
        self.queue = list(queue)
        self.calls: list[tuple] = []

    def create(self, *, assignment_id, filename, document):
        self.calls.append(("create", assignment_id, filename))
        return Submission.from_api({"_id": "new", "assignment": assignment_id})

    def list_mine(self):
        return list(self.mine)

    def list_for_facilitator(self):
        return list(self.queue)

    def review(self, submission_id, payload):
        self.calls.append(("review", submission_id, payload))
        return Submission.from_api({"_id": submission_id, **payload})


def _submission(sid, assignment="a1", status="Submitted", trainee="Ann"):
    return Submission.from_api(
        {"_id": sid, "assignment": {"_id": assignment, "title": "SQL joins"}, "status": status, "trainee": {"name": trainee}}
    )


def test_trainee_submits_a_project_file():
    repo = InMemorySubmissions()

    SubmissionService(repo).submit(
        current_role=Role.TRAINEE, assignment_id="a1", filename="joins.zip", document=io.BytesIO(b"PK")
    )

    assert repo.calls == [("create", "a1", "joins.zip")]


def test_submission_without_file_sends_nothing():
    repo = InMemorySubmissions()

    with pytest.raises(ValidationError):
        SubmissionService(repo).submit(current_role=Role.TRAINEE, assignment_id="a1", filename=None, document=None)

    assert repo.calls == []


@pytest.mark.parametrize("status", ["Reviewed", "Graded"])
def test_reviewed_work_cannot_be_replaced(status):
    repo = InMemorySubmissions(mine=[_submission("s1", status=status)])

    with pytest.raises(ValidationError):
        SubmissionService(repo).submit(
            current_role=Role.TRAINEE, assignment_id="a1", filename="v2.zip", document=io.BytesIO(b"PK")
        )

    assert repo.calls == []


def test_work_needing_revision_can_be_replaced():
    repo = InMemorySubmissions(mine=[_submission("s1", status="NeedsRevision")])

    SubmissionService(repo).submit(
        current_role=Role.TRAINEE, assignment_id="a1", filename="v2.zip", document=io.BytesIO(b"PK")
    )

    assert repo.calls == [("create", "a1", "v2.zip")]


def test_facilitators_cannot_submit():
    with pytest.raises(AuthorizationError):
        SubmissionService(InMemorySubmissions()).submit(
            current_role=Role.FACILITATOR, assignment_id="a1", filename="x.zip", document=io.BytesIO(b"")
        )


def test_review_with_grade():
    repo = InMemorySubmissions()

    result = SubmissionService(repo).review(
        current_role=Role.FACILITATOR, submission_id="s1", status="Reviewed", feedback=" Nice ", grade="92.5"
    )

    assert repo.calls == [("review", "s1", {"status": "Reviewed", "feedback": "Nice", "grade": 92.5})]
    assert result.status == SubmissionStatus.REVIEWED
    assert result.grade == "92.5"


@pytest.mark.parametrize(
    "form",
    [
        {"status": "Graded", "grade": 90},
        {"status": "Reviewed", "grade": None},
        {"status": "Reviewed", "grade": 101},
        {"status": "NeedsRevision", "grade": 50, "feedback": "Add tests"},
        {"status": "NeedsRevision", "feedback": ""},
    ],
)
def test_invalid_review_is_rejected_locally(form):
    repo = InMemorySubmissions()

    with pytest.raises(ValidationError):
        SubmissionService(repo).review(current_role=Role.FACILITATOR, submission_id="s1", **form)

    assert repo.calls == []


def test_review_queue_narrows_fetched_rows():
    repo = InMemorySubmissions(queue=[_submission("s1", trainee="Ann"), _submission("s2", status="Reviewed", trainee="Ben")])
    service = SubmissionService(repo)
    fetched = service.to_review(current_role=Role.FACILITATOR)

    assert [s.submission_id for s in service.narrow(fetched, status="Submitted")] == ["s1"]
    assert [s.submission_id for s in service.narrow(fetched, term="ben")] == ["s2"]
    assert service.stats(fetched)["total"] == 2


def test_rest_submit_uploads_project_file(conn, http):
    http.route("POST", "/submissions", status=201, data={"_id": "s9", "status": "Submitted"})

    submission = RestSubmissionRepository(conn).create(
        assignment_id="a1", filename="joins.zip", document=io.BytesIO(b"PK")
    )

    call = http.calls_to("POST", "/submissions")[0]
    assert call["data"] == {"assignmentId": "a1"}
    assert call["files"]["projectFile"][0] == "joins.zip"
    assert submission.submission_id == "s9"


def test_rest_submission_parses_populated_refs(conn, http):
    http.route(
        "GET",
        "/submissions/facilitator",
        data=[
            {
                "_id": "s1",
                "trainee": {"_id": "t1", "name": "Ann", "email": "ann@example.com"},
                "assignment": {"_id": "a1", "title": "Joins", "maxGrade": 50},
                "course": {"_id": "c1", "title": "SQL"},
                "program": {"_id": "p1", "name": "Data 101"},
                "status": "NeedsRevision",
                "grade": None,
            }
        ],
    )

    (submission,) = RestSubmissionRepository(conn).list_for_facilitator()

    assert submission.trainee_email == "ann@example.com"
    assert (submission.assignment_title, submission.max_grade) == ("Joins", 50)
    assert (submission.course_title, submission.program_name) == ("SQL", "Data 101")
    assert submission.status == SubmissionStatus.NEEDS_REVISION
    assert submission.grade is None


def test_review_route_is_facilitator_only(sign_in, http):
    resp = sign_in("Trainee").patch("/submissions/s1/review", json={"status": "Reviewed", "grade": 80})

    assert resp.status_code == 403
    assert http.calls == []

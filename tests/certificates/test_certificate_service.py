from __future__ import annotations

import pytest

from program_portal.certificates.model import Certificate, EligibleTrainee
from program_portal.certificates.rest_certificate_repository import RestCertificateRepository
from program_portal.certificates.service import CertificateService
from program_portal.core.enums import Role
from program_portal.core.exceptions import ApiError, AuthorizationError, ValidationError


class FlakyCertificates:
    """Fails issuing for the trainee ids in ``failing``."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.issued: list[tuple[str, str]] = []
        self.calls = 0

    def issue(self, *, program_id, trainee_id):
        self.calls += 1
        if trainee_id in self.failing:
            raise ApiError("Trainee has not completed the program", status_code=400)
        self.issued.append((trainee_id, program_id))
        return Certificate.from_api({"_id": f"c-{trainee_id}", "certificateId": f"CERT-{trainee_id}"})

    def list_all(self):
        return [
            Certificate.from_api({"_id": "1", "certificateId": "CERT-1", "trainee": {"name": "Ann Lee"}}),
            Certificate.from_api({"_id": "2", "certificateId": "CERT-2", "program": {"name": "Data Cohort"}}),
        ]

    def list_mine(self):
        return self.list_all()[:1]

    def eligible_trainees(self):
        return [
            EligibleTrainee.from_api({"_id": "t1", "name": "Ann", "isEligible": True}),
            EligibleTrainee.from_api({"_id": "t2", "name": "Ben"}),
        ]


def test_batch_issue_continues_past_failures():
    repo = FlakyCertificates(failing={"t2"})

    result = CertificateService(repo).issue_batch(
        current_role=Role.PROGRAM_MANAGER,
        trainees=[("t1", "p1"), ("t2", "p1"), ("t3", "p1")],
    )

    assert repo.calls == 3
    assert repo.issued == [("t1", "p1"), ("t3", "p1")]
    assert [o.succeeded for o in result.outcomes] == [True, False, True]
    assert result.outcomes[1].message == "Trainee has not completed the program"
    assert result.summary == "2 certificate(s) issued, 1 failed"


def test_batch_records_missing_ids_without_calling_the_server():
    repo = FlakyCertificates()

    result = CertificateService(repo).issue_batch(current_role=Role.SUPER_ADMIN, trainees=[("", "p1"), ("t1", "p1")])

    assert repo.calls == 1
    assert (result.issued, result.failed) == (1, 1)


def test_empty_batch_is_rejected():
    with pytest.raises(ValidationError):
        CertificateService(FlakyCertificates()).issue_batch(current_role=Role.SUPER_ADMIN, trainees=[])


def test_only_managers_issue_certificates():
    with pytest.raises(AuthorizationError):
        CertificateService(FlakyCertificates()).issue_batch(current_role=Role.FACILITATOR, trainees=[("t1", "p1")])


def test_listing_falls_back_to_unknown_and_searches():
    service = CertificateService(FlakyCertificates())

    rows = service.list_certificates(current_role=Role.SUPER_ADMIN)
    found = service.list_certificates(current_role=Role.SUPER_ADMIN, term="data")

    assert rows[0].program_name == "Unknown"
    assert rows[1].trainee_name == "Unknown"
    assert [c.certificate_id for c in found] == ["CERT-2"]
    assert len(service.list_certificates(current_role=Role.TRAINEE)) == 1


def test_only_eligible_trainees():
    rows = CertificateService(FlakyCertificates()).eligible_trainees(current_role=Role.PROGRAM_MANAGER, only_eligible=True)

    assert [r.trainee_id for r in rows] == ["t1"]


def test_template_name_is_required():
    with pytest.raises(ValidationError):
        CertificateService(FlakyCertificates()).create_template(current_role=Role.SUPER_ADMIN, name=" ")


def test_rest_issue_posts_one_request_per_trainee(conn, http):
    http.route("POST", "/certificates/issue", data={"_id": "c1", "certificateId": "CERT-1"})
    service = CertificateService(RestCertificateRepository(conn))

    result = service.issue_batch(current_role=Role.PROGRAM_MANAGER, trainees=[("t1", "p1"), ("t2", "p1")])

    assert [c["json"] for c in http.calls_to("POST", "/certificates/issue")] == [
        {"programId": "p1", "traineeId": "t1"},
        {"programId": "p1", "traineeId": "t2"},
    ]
    assert result.issued == 2

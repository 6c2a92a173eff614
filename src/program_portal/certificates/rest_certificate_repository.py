from __future__ import annotations

from typing import Sequence

from ..api.connection import ApiConnection
from ..api.rest_base import as_list
from .model import Certificate, CertificateTemplate, EligibleTrainee


class RestCertificateRepository:
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def list_all(self) -> Sequence[Certificate]:
        return [Certificate.from_api(c) for c in as_list(self._conn.get("/certificates"))]

    def list_mine(self) -> Sequence[Certificate]:
        return [Certificate.from_api(c) for c in as_list(self._conn.get("/certificates/my-certificates"))]

    def list_templates(self) -> Sequence[CertificateTemplate]:
        return [CertificateTemplate.from_api(t) for t in as_list(self._conn.get("/certificates/templates"))]

    def create_template(self, payload: dict) -> CertificateTemplate:
        return CertificateTemplate.from_api(self._conn.post("/certificates/templates", json=payload) or {})

    def update_template(self, template_id: str, payload: dict) -> CertificateTemplate:
        data = self._conn.patch(f"/certificates/templates/{template_id}", json=payload)
        return CertificateTemplate.from_api(data or {})

    def delete_template(self, template_id: str) -> None:
        self._conn.delete(f"/certificates/templates/{template_id}")

    def eligible_trainees(self) -> Sequence[EligibleTrainee]:
        data = self._conn.get("/certificates/eligible-students")
        return [EligibleTrainee.from_api(t) for t in as_list(data)]

    def issue(self, *, program_id: str, trainee_id: str) -> Certificate:
        data = self._conn.post("/certificates/issue", json={"programId": program_id, "traineeId": trainee_id})
        return Certificate.from_api(data or {})

    def download(self, certificate_id: str) -> bytes:
        return self._conn.get(f"/certificates/{certificate_id}/download", raw=True) or b""

    def resend_notification(self, certificate_id: str) -> None:
        self._conn.post(f"/certificates/{certificate_id}/resend-notification")

from __future__ import annotations

from typing import Protocol, Sequence

from .model import Certificate, CertificateTemplate, EligibleTrainee


class CertificateRepository(Protocol):
    def list_all(self) -> Sequence[Certificate]:
        raise NotImplementedError

    def list_mine(self) -> Sequence[Certificate]:
        raise NotImplementedError

    def list_templates(self) -> Sequence[CertificateTemplate]:
        raise NotImplementedError

    def create_template(self, payload: dict) -> CertificateTemplate:
        raise NotImplementedError

    def update_template(self, template_id: str, payload: dict) -> CertificateTemplate:
        raise NotImplementedError

    def delete_template(self, template_id: str) -> None:
        raise NotImplementedError

    def eligible_trainees(self) -> Sequence[EligibleTrainee]:
        raise NotImplementedError

    def issue(self, *, program_id: str, trainee_id: str) -> Certificate:
        raise NotImplementedError

    def download(self, certificate_id: str) -> bytes:
        raise NotImplementedError

    def resend_notification(self, certificate_id: str) -> None:
        raise NotImplementedError

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..common.listing import search
from ..common.validators import require_id, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ApiError, AuthorizationError, ValidationError
from .model import Certificate, CertificateTemplate, EligibleTrainee, IssueBatchResult, IssueOutcome
from .repository import CertificateRepository

logger = logging.getLogger(__name__)

ISSUERS = {Role.SUPER_ADMIN, Role.PROGRAM_MANAGER}
TEMPLATE_FIELDS = {
    "name": "name",
    "description": "description",
    "style": "style",
    "color_scheme": "colorScheme",
    "html_content": "htmlContent",
    "is_default": "isDefault",
}


def _template_payload(values: dict) -> dict:
    return {api: values[key] for key, api in TEMPLATE_FIELDS.items() if values.get(key) is not None}


class CertificateService:
    def __init__(self, certificates: CertificateRepository):
        self._certificates = certificates

    def list_certificates(self, *, current_role: Role, term: Optional[str] = None) -> list[Certificate]:
        if current_role == Role.TRAINEE:
            rows = self._certificates.list_mine()
        else:
            rows = self._certificates.list_all()
        return search(rows, term, fields=lambda c: (c.trainee_name, c.trainee_email, c.program_name, c.certificate_id))

    # Templates

    def list_templates(self) -> list[CertificateTemplate]:
        return list(self._certificates.list_templates())

    def create_template(self, *, current_role: Role, **values) -> CertificateTemplate:
        if current_role not in ISSUERS:
            raise AuthorizationError("You are not allowed to manage certificate templates")
        values["name"] = require_non_empty(values.get("name"), "Template name")
        return self._certificates.create_template(_template_payload(values))

    def update_template(self, *, current_role: Role, template_id: str, **values) -> CertificateTemplate:
        if current_role not in ISSUERS:
            raise AuthorizationError("You are not allowed to manage certificate templates")
        if values.get("name") is not None:
            values["name"] = require_non_empty(values["name"], "Template name")
        payload = _template_payload(values)
        if not payload:
            raise ValidationError("Nothing to update")
        return self._certificates.update_template(require_id(template_id, "Template"), payload)

    def delete_template(self, *, current_role: Role, template_id: str) -> None:
        if current_role not in ISSUERS:
            raise AuthorizationError("You are not allowed to manage certificate templates")
        self._certificates.delete_template(require_id(template_id, "Template"))

    # Issuing

    def eligible_trainees(self, *, current_role: Role, only_eligible: bool = False) -> list[EligibleTrainee]:
        if current_role not in ISSUERS:
            raise AuthorizationError("You are not allowed to issue certificates")
        rows = list(self._certificates.eligible_trainees())
        if only_eligible:
            rows = [r for r in rows if r.is_eligible]
        return rows

    def issue_batch(self, *, current_role: Role, trainees: Iterable[tuple[str, str]]) -> IssueBatchResult:
        """Issue one certificate per ``(trainee_id, program_id)`` pair.

        Every pair is attempted; a failure is recorded on its outcome and the
        batch carries on with the next trainee.
        """

        if current_role not in ISSUERS:
            raise AuthorizationError("You are not allowed to issue certificates")
        pairs = list(trainees)
        if not pairs:
            raise ValidationError("Select at least one trainee")

        outcomes = []
        for trainee_id, program_id in pairs:
            if not trainee_id or not program_id:
                outcomes.append(
                    IssueOutcome(
                        trainee_id=trainee_id or "",
                        program_id=program_id or "",
                        succeeded=False,
                        message="Trainee and program are required",
                    )
                )
                continue
            try:
                certificate = self._certificates.issue(program_id=program_id, trainee_id=trainee_id)
            except ApiError as e:
                logger.warning("Certificate for trainee %s in %s not issued: %s", trainee_id, program_id, e.message)
                outcomes.append(IssueOutcome(trainee_id, program_id, False, e.message))
                continue
            outcomes.append(IssueOutcome(trainee_id, program_id, True, "Certificate issued", certificate))

        result = IssueBatchResult(outcomes=outcomes)
        logger.info("Certificate batch: %s", result.summary)
        return result

    def download(self, certificate_id: str) -> bytes:
        return self._certificates.download(require_id(certificate_id, "Certificate"))

    def resend_notification(self, *, current_role: Role, certificate_id: str) -> None:
        if current_role not in ISSUERS:
            raise AuthorizationError("You are not allowed to resend certificate notifications")
        self._certificates.resend_notification(require_id(certificate_id, "Certificate"))

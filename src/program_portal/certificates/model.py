from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..api.rest_base import parse_datetime, ref_id
from ..core.constants import UNKNOWN_NAME


@dataclass(frozen=True)
class Certificate:
    """Display row for an issued certificate."""

    id: str
    certificate_id: str
    trainee_id: Optional[str]
    trainee_name: str
    trainee_email: str
    program_id: Optional[str]
    program_name: str
    issue_date: Optional[datetime]
    status: str = "issued"

    @classmethod
    def from_api(cls, data: dict) -> "Certificate":
        trainee = data.get("trainee") if isinstance(data.get("trainee"), dict) else {}
        program = data.get("program") if isinstance(data.get("program"), dict) else {}
        return cls(
            id=str(data.get("_id") or ""),
            certificate_id=data.get("certificateId") or "",
            trainee_id=ref_id(data.get("trainee")),
            trainee_name=trainee.get("name") or UNKNOWN_NAME,
            trainee_email=trainee.get("email") or "",
            program_id=ref_id(data.get("program")),
            program_name=program.get("name") or UNKNOWN_NAME,
            issue_date=parse_datetime(data.get("issueDate")),
        )


@dataclass(frozen=True)
class CertificateTemplate:
    template_id: str
    name: str
    description: str = ""
    style: str = ""
    color_scheme: str = ""
    html_content: Optional[str] = None
    is_default: bool = False
    created_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: dict) -> "CertificateTemplate":
        return cls(
            template_id=str(data.get("_id") or ""),
            name=data.get("name") or "",
            description=data.get("description") or "",
            style=data.get("style") or "",
            color_scheme=data.get("colorScheme") or "",
            html_content=data.get("htmlContent"),
            is_default=bool(data.get("isDefault", False)),
            created_at=parse_datetime(data.get("createdAt")),
        )


@dataclass(frozen=True)
class EligibleTrainee:
    trainee_id: str
    name: str
    email: str
    program_id: Optional[str]
    program_name: str
    final_score: float = 0.0
    attendance_rate: float = 0.0
    completion_date: Optional[datetime] = None
    is_eligible: bool = False

    @classmethod
    def from_api(cls, data: dict) -> "EligibleTrainee":
        return cls(
            trainee_id=str(data.get("_id") or ""),
            name=data.get("name") or UNKNOWN_NAME,
            email=data.get("email") or "",
            program_id=ref_id(data.get("programId")),
            program_name=data.get("program") if isinstance(data.get("program"), str) else UNKNOWN_NAME,
            final_score=float(data.get("finalScore") or 0),
            attendance_rate=float(data.get("attendanceRate") or 0),
            completion_date=parse_datetime(data.get("completionDate")),
            is_eligible=bool(data.get("isEligible", False)),
        )


@dataclass(frozen=True)
class IssueOutcome:
    """Result of issuing one certificate inside a batch."""

    trainee_id: str
    program_id: str
    succeeded: bool
    message: str
    certificate: Optional[Certificate] = None


@dataclass(frozen=True)
class IssueBatchResult:
    outcomes: list[IssueOutcome]

    @property
    def issued(self) -> int:
        return sum(1 for o in self.outcomes if o.succeeded)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.issued

    @property
    def summary(self) -> str:
        if not self.failed:
            return f"{self.issued} certificate(s) issued"
        return f"{self.issued} certificate(s) issued, {self.failed} failed"

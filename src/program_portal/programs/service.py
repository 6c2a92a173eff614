from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import parse_iso_date
from ..common.listing import count_by, filter_by_status, search
from ..common.validators import require_date_order, require_id, require_non_empty
from ..core.enums import ProgramStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Program, ProgramStats
from .repository import ProgramRepository

logger = logging.getLogger(__name__)

MANAGERS = {Role.SUPER_ADMIN, Role.PROGRAM_MANAGER}


def _parse_form_date(value, field_name: str) -> date:
    if isinstance(value, date):
        return value
    text = require_non_empty(value, field_name)
    try:
        return parse_iso_date(text[:10])
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


@dataclass(frozen=True)
class ProgramForm:
    name: str
    description: str
    start_date: date
    end_date: date

    def to_api(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
        }


class ProgramService:
    def __init__(self, programs: ProgramRepository):
        self._programs = programs

    @staticmethod
    def build_form(*, name: str, description: str, start_date, end_date) -> ProgramForm:
        start = _parse_form_date(start_date, "Start date")
        end = _parse_form_date(end_date, "End date")
        require_date_order(start, end)
        return ProgramForm(
            name=require_non_empty(name, "Program name"),
            description=(description or "").strip(),
            start_date=start,
            end_date=end,
        )

    def list_programs(self, *, status: Optional[str] = None, term: Optional[str] = None) -> list[Program]:
        programs = self._programs.list_all()
        programs = filter_by_status(programs, status)
        return search(programs, term, fields=lambda p: (p.name, p.description, p.manager_name))

    def list_archived(self, *, current_role: Role) -> list[Program]:
        if current_role not in MANAGERS:
            raise AuthorizationError("You do not have access to archived programs")
        return list(self._programs.list_archived())

    def get_program(self, program_id: str) -> Program:
        return self._programs.get_by_id(require_id(program_id, "Program"))

    def create_program(self, *, current_role: Role, name: str, description: str, start_date, end_date) -> Program:
        if current_role not in MANAGERS:
            raise AuthorizationError("You are not allowed to create programs")
        form = self.build_form(name=name, description=description, start_date=start_date, end_date=end_date)
        program = self._programs.create(form.to_api())
        logger.info("Program %s created", program.program_id)
        return program

    def update_program(
        self,
        *,
        current_role: Role,
        program_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        start_date=None,
        end_date=None,
    ) -> Program:
        if current_role not in MANAGERS:
            raise AuthorizationError("You are not allowed to edit programs")

        payload: dict = {}
        if name is not None:
            payload["name"] = require_non_empty(name, "Program name")
        if description is not None:
            payload["description"] = description.strip()
        start = _parse_form_date(start_date, "Start date") if start_date else None
        end = _parse_form_date(end_date, "End date") if end_date else None
        if start and end:
            require_date_order(start, end)
        if start:
            payload["startDate"] = start.isoformat()
        if end:
            payload["endDate"] = end.isoformat()
        if not payload:
            raise ValidationError("Nothing to update")

        return self._programs.update(require_id(program_id, "Program"), payload)

    def delete_program(self, *, current_role: Role, program_id: str) -> None:
        if current_role not in MANAGERS:
            raise AuthorizationError("You are not allowed to delete programs")
        self._programs.delete(require_id(program_id, "Program"))

    # Approval workflow: the server owns the status; we only send the request.

    def request_approval(self, *, current_role: Role, program_id: str) -> Program:
        if current_role != Role.PROGRAM_MANAGER:
            raise AuthorizationError("Only a Program Manager can submit a program for approval")
        return self._programs.request_approval(require_id(program_id, "Program"))

    def approve(self, *, current_role: Role, program_id: str) -> Program:
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a SuperAdmin can approve programs")
        return self._programs.approve(require_id(program_id, "Program"))

    def reject(self, *, current_role: Role, program_id: str, reason: str) -> Program:
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a SuperAdmin can reject programs")
        reason = require_non_empty(reason, "Rejection reason")
        return self._programs.reject(require_id(program_id, "Program"), reason=reason)

    def list_pending_approval(self) -> list[Program]:
        return filter_by_status(self._programs.list_all(), ProgramStatus.PENDING_APPROVAL)

    # Enrolment

    def enroll_trainee(self, *, current_role: Role, program_id: str, trainee_id: str) -> Program:
        if current_role != Role.PROGRAM_MANAGER:
            raise AuthorizationError("Only a Program Manager can enroll trainees")
        return self._programs.enroll_trainee(require_id(program_id, "Program"), require_id(trainee_id, "Trainee"))

    def unenroll_trainee(self, *, current_role: Role, program_id: str, trainee_id: str) -> Program:
        if current_role != Role.PROGRAM_MANAGER:
            raise AuthorizationError("Only a Program Manager can unenroll trainees")
        return self._programs.unenroll_trainee(require_id(program_id, "Program"), require_id(trainee_id, "Trainee"))

    def enroll_facilitator(self, *, current_role: Role, program_id: str, facilitator_id: str) -> Program:
        if current_role != Role.PROGRAM_MANAGER:
            raise AuthorizationError("Only a Program Manager can assign facilitators")
        return self._programs.enroll_facilitator(
            require_id(program_id, "Program"), require_id(facilitator_id, "Facilitator")
        )

    def assign_manager(self, *, current_role: Role, program_id: str, manager_id: str) -> Program:
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a SuperAdmin can assign program managers")
        return self._programs.assign_manager(require_id(program_id, "Program"), require_id(manager_id, "Manager"))

    # Lifecycle

    def mark_completed(self, *, current_role: Role, program_id: str) -> Program:
        if current_role not in MANAGERS:
            raise AuthorizationError("You are not allowed to complete programs")
        return self._programs.complete(require_id(program_id, "Program"))

    def reactivate(self, *, current_role: Role, program_id: str, new_end_date) -> Program:
        if current_role not in MANAGERS:
            raise AuthorizationError("You are not allowed to reactivate programs")
        program = self._programs.get_by_id(require_id(program_id, "Program"))
        end = _parse_form_date(new_end_date, "New end date")
        if program.start_date:
            require_date_order(
                program.start_date, end, strict=True, message="New end date must be after the program start date"
            )
        return self._programs.reactivate(program.program_id, new_end_date=end.isoformat())

    def archive(self, *, current_role: Role, program_id: str) -> Program:
        if current_role not in MANAGERS:
            raise AuthorizationError("You are not allowed to archive programs")
        return self._programs.archive(require_id(program_id, "Program"))

    def unarchive(self, *, current_role: Role, program_id: str) -> Program:
        if current_role not in MANAGERS:
            raise AuthorizationError("You are not allowed to restore programs")
        return self._programs.unarchive(require_id(program_id, "Program"))

    def get_stats(self, program_id: str) -> Optional[ProgramStats]:
        return self._programs.get_stats(require_id(program_id, "Program"))

    def report_pdf(self, *, current_role: Role, program_id: str) -> bytes:
        if current_role not in MANAGERS:
            raise AuthorizationError("You are not allowed to download program reports")
        return self._programs.report_pdf(require_id(program_id, "Program"))

    @staticmethod
    def status_counts(programs: list[Program]) -> dict[str, int]:
        return count_by(programs, lambda p: p.status, keys=list(ProgramStatus))

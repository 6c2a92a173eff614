from __future__ import annotations

import logging
from typing import Optional

from ..common.listing import filter_by_status, search
from ..common.validators import require_id, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ApiError, AuthorizationError, ValidationError
from ..programs.model import Program
from ..programs.repository import ProgramRepository
from ..users.repository import UserRepository
from ..users.service import require_email
from .model import Facilitator, HireResult

logger = logging.getLogger(__name__)

HIRING_MANAGERS = {Role.PROGRAM_MANAGER, Role.SUPER_ADMIN}
PROFILE_FIELDS = ("phone", "specialization", "experience", "bio")


class FacilitatorService:
    def __init__(self, users: UserRepository, programs: ProgramRepository):
        self._users = users
        self._programs = programs

    def list_facilitators(self, *, status: Optional[str] = None, term: Optional[str] = None) -> list[Facilitator]:
        rows = [Facilitator.from_user(u) for u in self._users.list_users(active=True, role=Role.FACILITATOR)]
        rows = filter_by_status(rows, status)
        return search(rows, term, fields=lambda f: (f.name, f.email, f.specialization))

    def candidates(self, role: Role = Role.FACILITATOR) -> list[Facilitator]:
        return [Facilitator.from_user(u) for u in self._users.list_by_role(role)]

    def hire(
        self, *, current_role: Role, name: str, email: str, program_id: Optional[str] = None
    ) -> HireResult:
        """Register a facilitator account, then assign it to ``program_id`` when given.

        The account is kept when the assignment fails; the failure is reported on the result.
        """

        if current_role not in HIRING_MANAGERS:
            raise AuthorizationError("You are not allowed to hire facilitators")
        name = require_non_empty(name, "Name")
        email = require_email(email)

        user = self._users.register(name=name, email=email, role=Role.FACILITATOR)
        facilitator = Facilitator.from_user(user)
        logger.info("Facilitator %s registered", facilitator.user_id)

        if not program_id:
            return HireResult(facilitator=facilitator)
        try:
            self._programs.enroll_facilitator(program_id, facilitator.user_id)
        except ApiError as e:
            logger.warning("Facilitator %s created but not assigned to %s: %s", facilitator.user_id, program_id, e)
            return HireResult(facilitator=facilitator, program_id=program_id, assignment_error=e.message)
        return HireResult(facilitator=facilitator, program_id=program_id)

    def assign(self, *, current_role: Role, facilitator_id: str, program_id: str) -> Program:
        if current_role not in HIRING_MANAGERS:
            raise AuthorizationError("You are not allowed to assign facilitators")
        return self._programs.enroll_facilitator(
            require_id(program_id, "Program"), require_id(facilitator_id, "Facilitator")
        )

    def update_profile(self, *, current_role: Role, facilitator_id: str, rating=None, **profile) -> Facilitator:
        if current_role not in HIRING_MANAGERS:
            raise AuthorizationError("You are not allowed to edit facilitator profiles")

        payload = {k: str(v).strip() for k, v in profile.items() if k in PROFILE_FIELDS and v is not None}
        if rating is not None:
            try:
                value = float(rating)
            except (TypeError, ValueError):
                raise ValidationError("Rating must be a number")
            if not 0 <= value <= 5:
                raise ValidationError("Rating must be between 0 and 5")
            payload["rating"] = value
        if not payload:
            raise ValidationError("Nothing to update")

        user = self._users.update_facilitator_profile(require_id(facilitator_id, "Facilitator"), payload)
        return Facilitator.from_user(user)

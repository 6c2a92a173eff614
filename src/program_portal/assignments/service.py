from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..api.rest_base import parse_datetime
from ..common.listing import search
from ..common.validators import require_id, require_non_empty, require_positive
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Assignment, ResendResult
from .repository import AssignmentRepository

logger = logging.getLogger(__name__)

AUTHORS = {Role.FACILITATOR}


def _due_date(value) -> datetime:
    due = value if isinstance(value, datetime) else parse_datetime(value)
    if due is None:
        raise ValidationError("Due date is required")
    return due


class AssignmentService:
    def __init__(self, assignments: AssignmentRepository):
        self._assignments = assignments

    def my_assignments(self, *, current_role: Role, term: Optional[str] = None) -> list[Assignment]:
        """Facilitators see what they created; trainees see what is available to them."""

        if current_role == Role.FACILITATOR:
            rows = self._assignments.list_mine()
        elif current_role == Role.TRAINEE:
            rows = self._assignments.list_available()
        else:
            raise AuthorizationError("You do not have assignments")
        rows = sorted(rows, key=lambda a: (a.due_date is None, a.due_date.timestamp() if a.due_date else 0))
        return search(rows, term, fields=lambda a: (a.title, a.description, a.course_title))

    def for_course(self, course_id: str) -> list[Assignment]:
        return list(self._assignments.list_for_course(require_id(course_id, "Course")))

    def for_program(self, program_id: str) -> list[Assignment]:
        return list(self._assignments.list_for_program(require_id(program_id, "Program")))

    def create_assignment(
        self,
        *,
        current_role: Role,
        title: str,
        description: str,
        program_id: str,
        course_id: str,
        roadmap_id: str,
        due_date,
        max_grade=100,
    ) -> Assignment:
        if current_role not in AUTHORS:
            raise AuthorizationError("Only facilitators can create assignments")
        payload = {
            "title": require_non_empty(title, "Assignment title"),
            "description": require_non_empty(description, "Description"),
            "program": require_id(program_id, "Program"),
            "course": require_id(course_id, "Course"),
            "roadmap": require_id(roadmap_id, "Roadmap week"),
            "dueDate": _due_date(due_date).isoformat(),
            "maxGrade": require_positive(max_grade, "Maximum grade"),
        }
        assignment = self._assignments.create(payload)
        logger.info("Assignment %s created for course %s", assignment.assignment_id, course_id)
        return assignment

    def update_assignment(self, *, current_role: Role, assignment_id: str, **changes) -> Assignment:
        if current_role not in AUTHORS:
            raise AuthorizationError("Only facilitators can edit assignments")

        payload: dict = {}
        if changes.get("title") is not None:
            payload["title"] = require_non_empty(changes["title"], "Assignment title")
        if changes.get("description") is not None:
            payload["description"] = require_non_empty(changes["description"], "Description")
        if changes.get("due_date") is not None:
            payload["dueDate"] = _due_date(changes["due_date"]).isoformat()
        if changes.get("max_grade") is not None:
            payload["maxGrade"] = require_positive(changes["max_grade"], "Maximum grade")
        if changes.get("is_active") is not None:
            payload["isActive"] = bool(changes["is_active"])
        if not payload:
            raise ValidationError("Nothing to update")

        return self._assignments.update(require_id(assignment_id, "Assignment"), payload)

    def delete_assignment(self, *, current_role: Role, assignment_id: str) -> None:
        if current_role not in AUTHORS:
            raise AuthorizationError("Only facilitators can delete assignments")
        self._assignments.delete(require_id(assignment_id, "Assignment"))

    def resend_notifications(self, *, current_role: Role, assignment_id: str) -> ResendResult:
        if current_role not in AUTHORS:
            raise AuthorizationError("Only facilitators can notify trainees")
        return self._assignments.resend_notifications(require_id(assignment_id, "Assignment"))

from __future__ import annotations

import logging
from typing import BinaryIO, Optional

from ..common.listing import filter_by_status, search
from ..common.validators import require_id, require_non_empty
from ..core.enums import ApprovalStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Course
from .repository import CourseRepository

logger = logging.getLogger(__name__)

AUTHORS = {Role.FACILITATOR}
REVIEWERS = {Role.SUPER_ADMIN, Role.PROGRAM_MANAGER}

# A course may be (re)submitted only from these statuses.
SUBMITTABLE = frozenset({ApprovalStatus.DRAFT, ApprovalStatus.REJECTED})


class CourseService:
    def __init__(self, courses: CourseRepository):
        self._courses = courses

    def create_course(
        self,
        *,
        current_role: Role,
        title: str,
        description: str,
        program_id: str,
        filename: Optional[str],
        document: Optional[BinaryIO],
    ) -> Course:
        if current_role not in AUTHORS:
            raise AuthorizationError("Only facilitators can upload courses")
        title = require_non_empty(title, "Course title")
        program_id = require_id(program_id, "Program")
        if document is None or not filename:
            raise ValidationError("Course document is required")

        course = self._courses.create(
            title=title,
            description=(description or "").strip(),
            program_id=program_id,
            filename=filename,
            document=document,
        )
        logger.info("Course %s uploaded for program %s", course.course_id, program_id)
        return course

    def my_courses(self, *, status: Optional[str] = None, term: Optional[str] = None) -> list[Course]:
        rows = filter_by_status(self._courses.list_mine(), status)
        return search(rows, term, fields=lambda c: (c.title, c.description, c.program_name))

    def courses_for_program(self, program_id: str) -> list[Course]:
        return list(self._courses.list_for_program(require_id(program_id, "Program")))

    def pending_courses(self, *, current_role: Role) -> list[Course]:
        if current_role not in REVIEWERS:
            raise AuthorizationError("You do not have access to course approvals")
        return list(self._courses.list_pending())

    def update_course(
        self, *, current_role: Role, course_id: str, title: Optional[str] = None, description: Optional[str] = None
    ) -> Course:
        if current_role not in AUTHORS:
            raise AuthorizationError("Only facilitators can edit courses")
        payload: dict = {}
        if title is not None:
            payload["title"] = require_non_empty(title, "Course title")
        if description is not None:
            payload["description"] = description.strip()
        if not payload:
            raise ValidationError("Nothing to update")
        return self._courses.update(require_id(course_id, "Course"), payload)

    def delete_course(self, *, current_role: Role, course_id: str) -> None:
        if current_role not in AUTHORS:
            raise AuthorizationError("Only facilitators can delete courses")
        self._courses.delete(require_id(course_id, "Course"))

    def request_approval(self, *, current_role: Role, course: Course) -> Course:
        """Submit ``course`` for review; ``course`` is the row as last fetched."""

        if current_role not in AUTHORS:
            raise AuthorizationError("Only facilitators can submit courses for approval")
        if course.status not in SUBMITTABLE:
            raise ValidationError(f"A course that is {course.status.value} cannot be submitted for approval")
        return self._courses.request_approval(course.course_id)

    def request_approval_by_id(self, *, current_role: Role, course_id: str) -> Course:
        course_id = require_id(course_id, "Course")
        course = next((c for c in self._courses.list_mine() if c.course_id == course_id), None)
        if course is None:
            raise ValidationError("Course not found")
        return self.request_approval(current_role=current_role, course=course)

    def approve(self, *, current_role: Role, course_id: str) -> Course:
        if current_role not in REVIEWERS:
            raise AuthorizationError("You are not allowed to approve courses")
        return self._courses.approve(require_id(course_id, "Course"))

    def reject(self, *, current_role: Role, course_id: str, reason: Optional[str]) -> Course:
        if current_role not in REVIEWERS:
            raise AuthorizationError("You are not allowed to reject courses")
        reason = require_non_empty(reason, "Rejection reason")
        return self._courses.reject(require_id(course_id, "Course"), reason=reason)

    def activate(self, *, current_role: Role, course_id: str) -> Course:
        if current_role not in REVIEWERS:
            raise AuthorizationError("You are not allowed to activate courses")
        return self._courses.activate(require_id(course_id, "Course"))

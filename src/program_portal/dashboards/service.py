"""Per-role dashboard aggregation.

Each dashboard is built from lists the feature services already fetch; the
numbers shown are counts over those lists, plus the server's own stats where
the backend provides an endpoint for them.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..assignments.service import AssignmentService
from ..attendance.service import AttendanceService
from ..certificates.service import CertificateService
from ..common.datetime_utils import now_utc
from ..common.listing import count_by, filter_by_status
from ..core.enums import ApprovalStatus, ProgramStatus, Role, SessionStatus, SubmissionStatus
from ..core.exceptions import AuthorizationError
from ..courses.service import CourseService
from ..programs.service import ProgramService
from ..submissions.service import SubmissionService
from ..tickets.service import CLOSED_STATUSES, TicketService
from ..users.service import UserService
from .repository import DashboardRepository

logger = logging.getLogger(__name__)

UPCOMING_LIMIT = 5
RECENT_USERS_LIMIT = 5
RECENT_TICKETS_LIMIT = 10


def _by_start(session) -> float:
    return session.start_time.timestamp() if session.start_time else float("inf")


class DashboardService:
    def __init__(
        self,
        dashboard: DashboardRepository,
        *,
        programs: ProgramService,
        attendance: AttendanceService,
        courses: CourseService,
        certificates: CertificateService,
        assignments: AssignmentService,
        users: UserService,
        tickets: TicketService,
        submissions: SubmissionService,
    ):
        self._dashboard = dashboard
        self._programs = programs
        self._attendance = attendance
        self._courses = courses
        self._certificates = certificates
        self._assignments = assignments
        self._users = users
        self._tickets = tickets
        self._submissions = submissions

    def build(self, role: Optional[Role]) -> dict:
        builders = {
            Role.SUPER_ADMIN: self.super_admin,
            Role.PROGRAM_MANAGER: self.program_manager,
            Role.FACILITATOR: self.facilitator,
            Role.TRAINEE: self.trainee,
            Role.IT_SUPPORT: self.it_support,
        }
        if role not in builders:
            raise AuthorizationError("Unknown role")
        return builders[role]()

    def super_admin(self) -> dict:
        programs = self._programs.list_programs()
        return {
            "stats": self._dashboard.stats(),
            "programs_by_status": ProgramService.status_counts(programs),
            "pending_programs": filter_by_status(programs, ProgramStatus.PENDING_APPROVAL),
            "recent_users": list(self._dashboard.onboarded_users(limit=RECENT_USERS_LIMIT)),
        }

    def program_manager(self) -> dict:
        programs = self._programs.list_programs()
        pending_courses = self._courses.pending_courses(current_role=Role.PROGRAM_MANAGER)
        return {
            "stats": self._dashboard.stats(),
            "programs_by_status": ProgramService.status_counts(programs),
            "active_programs": filter_by_status(programs, ProgramStatus.ACTIVE),
            "pending_courses": len(pending_courses),
            "trainees": sum(p.trainee_count for p in programs),
        }

    def facilitator(self) -> dict:
        sessions = self._attendance.list_facilitator_sessions()
        upcoming = sorted(filter_by_status(sessions, SessionStatus.SCHEDULED), key=_by_start)
        courses = self._courses.my_courses()
        return {
            "stats": self._dashboard.facilitator_stats(),
            "sessions_by_status": AttendanceService.session_stats(sessions),
            "active_sessions": filter_by_status(sessions, SessionStatus.ACTIVE),
            "upcoming_sessions": upcoming[:UPCOMING_LIMIT],
            "courses_by_status": count_by(courses, lambda c: c.status, keys=list(ApprovalStatus)),
            "assignments": len(self._assignments.my_assignments(current_role=Role.FACILITATOR)),
            "pending_reviews": len(
                filter_by_status(self._submissions.to_review(current_role=Role.FACILITATOR), SubmissionStatus.SUBMITTED)
            ),
        }

    def trainee(self) -> dict:
        sessions = self._attendance.list_trainee_sessions()
        history = self._attendance.my_history()
        now = now_utc().timestamp()
        upcoming = [s for s in sorted(sessions, key=_by_start) if s.status == SessionStatus.SCHEDULED and _by_start(s) >= now]
        return {
            "active_sessions": filter_by_status(sessions, SessionStatus.ACTIVE),
            "upcoming_sessions": upcoming[:UPCOMING_LIMIT],
            "attendance": AttendanceService.record_stats(history),
            "certificates": len(self._certificates.list_certificates(current_role=Role.TRAINEE)),
            "assignments": len(self._assignments.my_assignments(current_role=Role.TRAINEE)),
        }

    def it_support(self) -> dict:
        users = self._users.list_users(active=True)
        archived = self._users.list_users(active=False)
        tickets = self._tickets.list_tickets()
        return {
            "users_by_role": count_by(users, lambda u: u.role.value if u.role else "unknown", keys=list(Role)),
            "active_users": sum(1 for u in users if u.is_active),
            "inactive_users": sum(1 for u in users if not u.is_active) + len(archived),
            "tickets": TicketService.stats(tickets),
            "open_tickets": [t for t in tickets if t.status not in CLOSED_STATUSES][:RECENT_TICKETS_LIMIT],
        }

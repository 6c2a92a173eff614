from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from .api.connection import ApiConfig, ApiConnection, TokenProvider
from .assignments.rest_assignment_repository import RestAssignmentRepository
from .assignments.service import AssignmentService
from .attendance.factory import AttendanceStrategyFactory
from .attendance.rest_attendance_repository import RestAttendanceRepository
from .attendance.service import AttendanceService
from .certificates.rest_certificate_repository import RestCertificateRepository
from .certificates.service import CertificateService
from .courses.rest_course_repository import RestCourseRepository
from .courses.service import CourseService
from .dashboards.rest_dashboard_repository import RestDashboardRepository
from .dashboards.service import DashboardService
from .facilitators.service import FacilitatorService
from .notifications.rest_notification_repository import RestNotificationRepository
from .notifications.service import CountsService, NotificationService
from .programs.rest_program_repository import RestProgramRepository
from .programs.service import ProgramService
from .reports.rest_export_repository import RestExportRepository
from .reports.service import ReportService
from .roadmaps.rest_roadmap_repository import RestRoadmapRepository
from .roadmaps.service import RoadmapService
from .site_settings.rest_settings_repository import RestSettingsRepository
from .site_settings.service import SettingsService
from .submissions.rest_submission_repository import RestSubmissionRepository
from .submissions.service import SubmissionService
from .tickets.rest_ticket_repository import RestTicketRepository
from .tickets.service import TicketService
from .users.rest_user_repository import RestUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: ApiConnection

    users_repo: RestUserRepository
    programs_repo: RestProgramRepository
    attendance_repo: RestAttendanceRepository
    courses_repo: RestCourseRepository
    roadmaps_repo: RestRoadmapRepository
    certificates_repo: RestCertificateRepository
    assignments_repo: RestAssignmentRepository
    notifications_repo: RestNotificationRepository
    dashboard_repo: RestDashboardRepository
    exports_repo: RestExportRepository
    tickets_repo: RestTicketRepository
    submissions_repo: RestSubmissionRepository
    settings_repo: RestSettingsRepository

    auth_service: AuthService
    user_service: UserService
    program_service: ProgramService
    attendance_service: AttendanceService
    course_service: CourseService
    roadmap_service: RoadmapService
    facilitator_service: FacilitatorService
    certificate_service: CertificateService
    assignment_service: AssignmentService
    notification_service: NotificationService
    counts_service: CountsService
    dashboard_service: DashboardService
    report_service: ReportService
    ticket_service: TicketService
    submission_service: SubmissionService
    settings_service: SettingsService


def build_container(
    *,
    api_config: dict,
    token_provider: Optional[TokenProvider] = None,
    http: Optional[requests.Session] = None,
) -> Container:
    config = ApiConfig(
        base_url=str(api_config["base_url"]),
        timeout=int(api_config.get("timeout", 15)),
    )
    if http is not None:
        conn = ApiConnection(config, token_provider=token_provider, http=http)
    else:
        conn = ApiConnection.get_instance(config, token_provider=token_provider)

    users_repo = RestUserRepository(conn)
    programs_repo = RestProgramRepository(conn)
    attendance_repo = RestAttendanceRepository(conn)
    courses_repo = RestCourseRepository(conn)
    roadmaps_repo = RestRoadmapRepository(conn)
    certificates_repo = RestCertificateRepository(conn)
    assignments_repo = RestAssignmentRepository(conn)
    notifications_repo = RestNotificationRepository(conn)
    dashboard_repo = RestDashboardRepository(conn)
    exports_repo = RestExportRepository(conn)
    tickets_repo = RestTicketRepository(conn)
    submissions_repo = RestSubmissionRepository(conn)
    settings_repo = RestSettingsRepository(conn)

    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    program_service = ProgramService(programs_repo)
    attendance_service = AttendanceService(attendance_repo, strategy_factory=AttendanceStrategyFactory())
    course_service = CourseService(courses_repo)
    roadmap_service = RoadmapService(roadmaps_repo)
    facilitator_service = FacilitatorService(users_repo, programs_repo)
    certificate_service = CertificateService(certificates_repo)
    assignment_service = AssignmentService(assignments_repo)
    notification_service = NotificationService(notifications_repo)
    counts_service = CountsService(programs_repo, users_repo, certificates_repo)
    ticket_service = TicketService(tickets_repo)
    submission_service = SubmissionService(submissions_repo)
    settings_service = SettingsService(settings_repo)
    dashboard_service = DashboardService(
        dashboard_repo,
        programs=program_service,
        attendance=attendance_service,
        courses=course_service,
        certificates=certificate_service,
        assignments=assignment_service,
        users=user_service,
        tickets=ticket_service,
        submissions=submission_service,
    )
    report_service = ReportService(exports_repo, attendance_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        programs_repo=programs_repo,
        attendance_repo=attendance_repo,
        courses_repo=courses_repo,
        roadmaps_repo=roadmaps_repo,
        certificates_repo=certificates_repo,
        assignments_repo=assignments_repo,
        notifications_repo=notifications_repo,
        dashboard_repo=dashboard_repo,
        exports_repo=exports_repo,
        tickets_repo=tickets_repo,
        submissions_repo=submissions_repo,
        settings_repo=settings_repo,
        auth_service=auth_service,
        user_service=user_service,
        program_service=program_service,
        attendance_service=attendance_service,
        course_service=course_service,
        roadmap_service=roadmap_service,
        facilitator_service=facilitator_service,
        certificate_service=certificate_service,
        assignment_service=assignment_service,
        notification_service=notification_service,
        counts_service=counts_service,
        dashboard_service=dashboard_service,
        report_service=report_service,
        ticket_service=ticket_service,
        submission_service=submission_service,
        settings_service=settings_service,
    )

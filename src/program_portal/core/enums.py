from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles, with the exact values the backend stores."""

    SUPER_ADMIN = "SuperAdmin"
    PROGRAM_MANAGER = "Program Manager"
    FACILITATOR = "Facilitator"
    TRAINEE = "Trainee"
    IT_SUPPORT = "it_support"


class Permission(str, Enum):
    MANAGE_USERS = "manage_users"
    MANAGE_PROGRAMS = "manage_programs"
    VIEW_REPORTS = "view_reports"
    MANAGE_ATTENDANCE = "manage_attendance"
    UPLOAD_CURRICULUM = "upload_curriculum"
    REVIEW_PROJECTS = "review_projects"
    SUBMIT_PROJECTS = "submit_projects"
    VIEW_OWN_PROGRAMS = "view_own_programs"
    MANAGE_SYSTEM = "manage_system"
    PROVIDE_SUPPORT = "provide_support"


class SessionStatus(str, Enum):
    """Class session lifecycle as reported by the server."""

    SCHEDULED = "scheduled"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SessionType(str, Enum):
    ONLINE = "online"
    PHYSICAL = "physical"


class AttendanceMethod(str, Enum):
    """Capability used to mark attendance; each maps to its own endpoint."""

    QR_CODE = "qr_code"
    GEOLOCATION = "geolocation"
    MANUAL = "manual"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    EXCUSED = "Excused"
    LATE = "Late"


class ProgramStatus(str, Enum):
    DRAFT = "Draft"
    PENDING_APPROVAL = "PendingApproval"
    ACTIVE = "Active"
    COMPLETED = "Completed"
    REJECTED = "Rejected"


class ApprovalStatus(str, Enum):
    """Approval flow shared by courses and roadmap weeks."""

    DRAFT = "Draft"
    PENDING_APPROVAL = "PendingApproval"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class TicketStatus(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class TicketPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class TicketCategory(str, Enum):
    HARDWARE = "Hardware"
    SOFTWARE = "Software"
    NETWORK = "Network"
    ACCOUNT = "Account"
    OTHER = "Other"


class SubmissionStatus(str, Enum):
    """Review state of a trainee's project submission."""

    SUBMITTED = "Submitted"
    REVIEWED = "Reviewed"
    NEEDS_REVISION = "NeedsRevision"
    GRADED = "Graded"


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    APPROVAL = "approval"


def parse_enum(enum_cls, value, default):
    """Map a raw server value onto ``enum_cls``; unknown values give ``default``."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return default

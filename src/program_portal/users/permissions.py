from __future__ import annotations

from typing import Optional

from ..core.enums import Permission, Role

ROLE_DISPLAY_NAMES: dict[Role, str] = {
    Role.SUPER_ADMIN: "Super Admin",
    Role.PROGRAM_MANAGER: "Program Manager",
    Role.FACILITATOR: "Facilitator",
    Role.TRAINEE: "Trainee",
    Role.IT_SUPPORT: "IT-Support",
}

ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.SUPER_ADMIN: frozenset(
        {
            Permission.MANAGE_USERS,
            Permission.MANAGE_PROGRAMS,
            Permission.VIEW_REPORTS,
            Permission.MANAGE_ATTENDANCE,
            Permission.UPLOAD_CURRICULUM,
            Permission.REVIEW_PROJECTS,
            Permission.MANAGE_SYSTEM,
            Permission.PROVIDE_SUPPORT,
        }
    ),
    Role.PROGRAM_MANAGER: frozenset(
        {
            Permission.MANAGE_PROGRAMS,
            Permission.VIEW_REPORTS,
            Permission.MANAGE_ATTENDANCE,
            Permission.UPLOAD_CURRICULUM,
            Permission.REVIEW_PROJECTS,
        }
    ),
    Role.FACILITATOR: frozenset(
        {
            Permission.VIEW_OWN_PROGRAMS,
            Permission.MANAGE_ATTENDANCE,
            Permission.UPLOAD_CURRICULUM,
            Permission.REVIEW_PROJECTS,
        }
    ),
    Role.TRAINEE: frozenset({Permission.VIEW_OWN_PROGRAMS, Permission.SUBMIT_PROJECTS}),
    Role.IT_SUPPORT: frozenset({Permission.VIEW_REPORTS, Permission.PROVIDE_SUPPORT, Permission.MANAGE_SYSTEM}),
}


def permissions_for(role: Optional[Role]) -> frozenset[Permission]:
    return ROLE_PERMISSIONS.get(role, frozenset()) if role else frozenset()


def has_permission(role: Optional[Role], permission: Permission) -> bool:
    return permission in permissions_for(role)


def display_name(role: Optional[Role]) -> str:
    if role is None:
        return "-"
    return ROLE_DISPLAY_NAMES.get(role, role.value)

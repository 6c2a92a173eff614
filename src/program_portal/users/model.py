from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..api.rest_base import parse_datetime, ref_list
from ..core.enums import Role, parse_enum


@dataclass(frozen=True)
class User:
    """Domain entity: a platform account, as returned by ``/users/manage``."""

    user_id: str
    name: str
    email: str
    role: Optional[Role]
    is_active: bool = True
    status: Optional[str] = None
    enrolled_programs: list[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
    extra: dict = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, data: dict) -> "User":
        return cls(
            user_id=str(data.get("_id") or data.get("id") or ""),
            name=data.get("name") or "",
            email=data.get("email") or "",
            role=parse_enum(Role, data.get("role"), None),
            is_active=bool(data.get("isActive", True)),
            status=data.get("status"),
            enrolled_programs=ref_list(data.get("enrolledPrograms")),
            created_at=parse_datetime(data.get("createdAt")),
            last_login=parse_datetime(data.get("lastLogin")),
            extra=dict(data),
        )


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    name: str
    email: str
    role: Role
    access_token: str

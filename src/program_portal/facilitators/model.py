from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..users.model import User

ACTIVE = "Active"
INACTIVE = "Inactive"
NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class Facilitator:
    """Hiring view of a facilitator account."""

    user_id: str
    name: str
    email: str
    status: str
    programs: list[str] = field(default_factory=list)
    join_date: Optional[datetime] = None
    phone: str = NOT_AVAILABLE
    specialization: str = NOT_AVAILABLE
    experience: str = NOT_AVAILABLE
    rating: Optional[float] = None

    @classmethod
    def from_user(cls, user: User) -> "Facilitator":
        profile = user.extra.get("facilitatorProfile") or {}
        rating = profile.get("rating")
        return cls(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            status=ACTIVE if user.is_active else INACTIVE,
            programs=list(user.enrolled_programs),
            join_date=user.created_at,
            phone=profile.get("phone") or user.extra.get("phone") or NOT_AVAILABLE,
            specialization=profile.get("specialization") or NOT_AVAILABLE,
            experience=profile.get("experience") or NOT_AVAILABLE,
            rating=float(rating) if rating is not None else None,
        )


@dataclass(frozen=True)
class HireResult:
    facilitator: Facilitator
    program_id: Optional[str] = None
    assignment_error: Optional[str] = None

    @property
    def assigned(self) -> bool:
        return self.program_id is not None and self.assignment_error is None

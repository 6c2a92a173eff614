from __future__ import annotations

import logging
import re
from typing import Optional

from ..common.listing import search
from ..common.validators import require_id, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ApiError, AuthenticationError, AuthorizationError, ValidationError
from .model import SessionUser, User
from .repository import UserRepository

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_email(value: Optional[str]) -> str:
    email = require_non_empty(value, "Email").lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Email address is not valid")
    return email


class AuthService:
    """Use case: sign a user in against the backend."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = require_email(email)
        if not password:
            raise ValidationError("Password is required")

        try:
            user, token = self._users.login(email=email, password=password)
        except ApiError as e:
            if e.status_code in {400, 401, 403, 404}:
                raise AuthenticationError(e.message or "Invalid email or password")
            raise

        if user.role is None:
            raise AuthenticationError("This account has no dashboard role")

        logger.info("User %s signed in as %s", user.user_id, user.role.value)
        return SessionUser(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=user.role,
            access_token=token,
        )

    def logout(self) -> None:
        try:
            self._users.logout()
        except ApiError as e:
            # the local session is cleared regardless
            logger.info("Server-side logout failed: %s", e.message)

    def current_user(self) -> User:
        return self._users.get_current()


class UserService:
    """Use case: manage accounts (SuperAdmin / Program Manager)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(
        self,
        *,
        active: bool = True,
        role: Optional[Role] = None,
        term: Optional[str] = None,
    ) -> list[User]:
        users = self._users.list_users(active=active, role=role)
        return search(users, term, fields=lambda u: (u.name, u.email))

    def list_by_role(self, role: Role) -> list[User]:
        return list(self._users.list_by_role(role))

    def list_managers(self, *, current_role: Role) -> list[User]:
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a SuperAdmin can list program managers")
        return list(self._users.list_managers())

    def get_details(self, user_id: str) -> dict:
        return self._users.get_details(require_id(user_id, "User"))

    def register(self, *, current_role: Role, name: str, email: str, role: Role) -> User:
        if current_role not in {Role.SUPER_ADMIN, Role.PROGRAM_MANAGER}:
            raise AuthorizationError("You are not allowed to register users")
        if current_role == Role.PROGRAM_MANAGER and role not in {Role.TRAINEE, Role.FACILITATOR}:
            raise AuthorizationError("Program managers can only register trainees and facilitators")
        return self._users.register(name=require_non_empty(name, "Name"), email=require_email(email), role=role)

    def register_trainee(self, *, current_role: Role, name: str, email: str) -> User:
        return self.register(current_role=current_role, name=name, email=email, role=Role.TRAINEE)

    def set_active(self, *, current_role: Role, current_user_id: str, user_id: str, is_active: bool) -> User:
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a SuperAdmin can change account status")
        if not is_active and user_id == current_user_id:
            raise ValidationError("You cannot deactivate your own account")
        return self._users.update_status(require_id(user_id, "User"), is_active=is_active)

    def update_details(
        self,
        *,
        current_role: Role,
        user_id: str,
        name: Optional[str] = None,
        role: Optional[Role] = None,
    ) -> User:
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a SuperAdmin can edit accounts")
        if name is not None:
            name = require_non_empty(name, "Name")
        if name is None and role is None:
            raise ValidationError("Nothing to update")
        return self._users.update_details(require_id(user_id, "User"), name=name, role=role)

    def delete_user(self, *, current_role: Role, current_user_id: str, user_id: str) -> None:
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a SuperAdmin can delete accounts")
        if user_id == current_user_id:
            raise ValidationError("You cannot delete your own account")
        self._users.delete(require_id(user_id, "User"))

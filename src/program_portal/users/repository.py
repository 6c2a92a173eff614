from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    def login(self, *, email: str, password: str) -> tuple[User, str]:
        """Return the signed-in user and its access token."""

        raise NotImplementedError

    def logout(self) -> None:
        raise NotImplementedError

    def get_current(self) -> User:
        raise NotImplementedError

    def list_users(self, *, active: bool = True, role: Optional[Role] = None) -> Sequence[User]:
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[User]:
        raise NotImplementedError

    def list_managers(self) -> Sequence[User]:
        raise NotImplementedError

    def get_details(self, user_id: str) -> dict:
        raise NotImplementedError

    def register(self, *, name: str, email: str, role: Role) -> User:
        raise NotImplementedError

    def update_status(self, user_id: str, *, is_active: bool) -> User:
        raise NotImplementedError

    def update_details(self, user_id: str, *, name: Optional[str] = None, role: Optional[Role] = None) -> User:
        raise NotImplementedError

    def update_facilitator_profile(self, user_id: str, profile: dict) -> User:
        raise NotImplementedError

    def delete(self, user_id: str) -> None:
        raise NotImplementedError

from __future__ import annotations

from typing import Optional, Sequence

from ..api.connection import ApiConnection
from ..api.rest_base import as_list
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .model import User


class RestUserRepository:
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def login(self, *, email: str, password: str) -> tuple[User, str]:
        data = self._conn.post("/auth/login", json={"email": email, "password": password}) or {}
        token = data.get("accessToken")
        if not token or not data.get("user"):
            raise AuthenticationError("Invalid email or password")
        return User.from_api(data["user"]), token

    def logout(self) -> None:
        self._conn.post("/auth/logout")

    def get_current(self) -> User:
        return User.from_api(self._conn.get("/users/me") or {})

    def list_users(self, *, active: bool = True, role: Optional[Role] = None) -> Sequence[User]:
        path = "/users/manage" if active else "/users/manage/archived"
        params = {"role": role.value} if role else None
        return [User.from_api(u) for u in as_list(self._conn.get(path, params=params))]

    def list_by_role(self, role: Role) -> Sequence[User]:
        data = self._conn.get("/users/manage/list-by-role", params={"role": role.value})
        return [User.from_api(u) for u in as_list(data)]

    def list_managers(self) -> Sequence[User]:
        return [User.from_api(u) for u in as_list(self._conn.get("/users/managers"))]

    def get_details(self, user_id: str) -> dict:
        return self._conn.get(f"/users/manage/{user_id}") or {}

    def register(self, *, name: str, email: str, role: Role) -> User:
        data = self._conn.post("/auth/register", json={"name": name, "email": email, "role": role.value})
        return User.from_api(data or {})

    def update_status(self, user_id: str, *, is_active: bool) -> User:
        data = self._conn.patch(f"/users/manage/{user_id}/status", json={"isActive": bool(is_active)})
        return User.from_api(data or {})

    def update_details(self, user_id: str, *, name: Optional[str] = None, role: Optional[Role] = None) -> User:
        body = {}
        if name is not None:
            body["name"] = name
        if role is not None:
            body["role"] = role.value
        return User.from_api(self._conn.patch(f"/users/manage/{user_id}", json=body) or {})

    def update_facilitator_profile(self, user_id: str, profile: dict) -> User:
        data = self._conn.patch(f"/users/manage/{user_id}/facilitator-profile", json=profile)
        return User.from_api(data or {})

    def delete(self, user_id: str) -> None:
        self._conn.delete(f"/users/manage/{user_id}")

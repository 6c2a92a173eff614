from __future__ import annotations

import pytest

from program_portal.core.enums import Permission, Role
from program_portal.core.exceptions import ApiError, AuthenticationError, AuthorizationError, ValidationError
from program_portal.users.model import User
from program_portal.users.permissions import display_name, has_permission, permissions_for
from program_portal.users.rest_user_repository import RestUserRepository
from program_portal.users.service import AuthService, UserService


class InMemoryUsers:
    def __init__(self, *, login_error: ApiError | None = None, role: str = "Program Manager"):
        self.login_error = login_error
        self.role = role
        self.calls: list[tuple] = []

    def login(self, *, email, password):
        self.calls.append(("login", email))
        if self.login_error:
            raise self.login_error
        return User.from_api({"_id": "u1", "name": "Maya", "email": email, "role": self.role}), "tok-abc"

    def register(self, *, name, email, role):
        self.calls.append(("register", name, email, role))
        return User.from_api({"_id": "u2", "name": name, "email": email, "role": role.value})

    def update_status(self, user_id, *, is_active):
        self.calls.append(("update_status", user_id, is_active))
        return User.from_api({"_id": user_id, "isActive": is_active})

    def delete(self, user_id):
        self.calls.append(("delete", user_id))


def test_authenticate_returns_session_user():
    repo = InMemoryUsers()

    user = AuthService(repo).authenticate(" Maya@Example.com ", "secret")

    assert repo.calls == [("login", "maya@example.com")]
    assert user.role == Role.PROGRAM_MANAGER
    assert user.access_token == "tok-abc"


def test_authenticate_maps_rejected_credentials():
    repo = InMemoryUsers(login_error=ApiError("Invalid credentials", status_code=401))

    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        AuthService(repo).authenticate("maya@example.com", "wrong")


def test_authenticate_rejects_accounts_without_a_known_role():
    with pytest.raises(AuthenticationError):
        AuthService(InMemoryUsers(role="Alumni")).authenticate("maya@example.com", "secret")


def test_authenticate_validates_before_calling_the_server():
    repo = InMemoryUsers()

    with pytest.raises(ValidationError):
        AuthService(repo).authenticate("maya", "secret")
    with pytest.raises(ValidationError):
        AuthService(repo).authenticate("maya@example.com", "")

    assert repo.calls == []


def test_program_managers_register_only_trainees_and_facilitators():
    repo = InMemoryUsers()
    service = UserService(repo)

    with pytest.raises(AuthorizationError):
        service.register(current_role=Role.PROGRAM_MANAGER, name="Sam", email="sam@example.com", role=Role.SUPER_ADMIN)
    trainee = service.register_trainee(current_role=Role.PROGRAM_MANAGER, name="Sam", email="sam@example.com")

    assert trainee.role == Role.TRAINEE
    assert repo.calls == [("register", "Sam", "sam@example.com", Role.TRAINEE)]


def test_super_admin_cannot_deactivate_or_delete_self():
    repo = InMemoryUsers()
    service = UserService(repo)

    with pytest.raises(ValidationError):
        service.set_active(current_role=Role.SUPER_ADMIN, current_user_id="u1", user_id="u1", is_active=False)
    with pytest.raises(ValidationError):
        service.delete_user(current_role=Role.SUPER_ADMIN, current_user_id="u1", user_id="u1")
    service.set_active(current_role=Role.SUPER_ADMIN, current_user_id="u1", user_id="u9", is_active=False)

    assert repo.calls == [("update_status", "u9", False)]


def test_role_permission_table():
    assert has_permission(Role.SUPER_ADMIN, Permission.MANAGE_USERS)
    assert not has_permission(Role.PROGRAM_MANAGER, Permission.MANAGE_USERS)
    assert has_permission(Role.TRAINEE, Permission.SUBMIT_PROJECTS)
    assert permissions_for(None) == frozenset()
    assert display_name(Role.IT_SUPPORT) == "IT-Support"


def test_rest_login_reads_user_and_token(conn, http):
    http.route(
        "POST",
        "/auth/login",
        data={"user": {"_id": "u1", "name": "Maya", "role": "SuperAdmin"}, "accessToken": "jwt-1"},
    )

    user, token = RestUserRepository(conn).login(email="maya@example.com", password="secret")

    assert (user.user_id, user.role, token) == ("u1", Role.SUPER_ADMIN, "jwt-1")


def test_rest_list_facilitators_uses_role_filter(conn, http):
    http.route("GET", "/users/manage", data=[{"_id": "f1", "role": "Facilitator"}])

    users = RestUserRepository(conn).list_users(role=Role.FACILITATOR)

    assert [u.user_id for u in users] == ["f1"]
    assert http.calls[0]["params"] == {"role": "Facilitator"}

from __future__ import annotations

from flask import Flask, request, session

from ..common.web import (
    current_role,
    current_user_id,
    dump,
    fail,
    handle_errors,
    json_body,
    login_required,
    ok,
    roles_required,
)
from ..core.enums import Role, parse_enum
from ..core.exceptions import ValidationError
from ..container import Container
from .permissions import display_name, permissions_for


def register(app: Flask, container: Container) -> None:
    users = container.user_service
    admins = (Role.SUPER_ADMIN, Role.PROGRAM_MANAGER)

    @app.route("/login", methods=["POST"], endpoint="login")
    @handle_errors("Login failed")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email"), data.get("password"))

        session.clear()
        session.permanent = bool(data.get("remember"))
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["email"] = s_user.email
        session["role"] = s_user.role.value
        session["access_token"] = s_user.access_token
        return ok(
            "Signed in successfully",
            user={"id": s_user.user_id, "name": s_user.name, "email": s_user.email, "role": s_user.role.value},
            roleName=display_name(s_user.role),
            permissions=sorted(p.value for p in permissions_for(s_user.role)),
        )

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        if "access_token" in session:
            container.auth_service.logout()
        session.clear()
        return ok("Signed out")

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    @handle_errors("Failed to load your profile")
    def me():
        return ok(user=dump(container.auth_service.current_user()))

    # ------------------------------------------------------------------
    # Account management
    # ------------------------------------------------------------------

    @app.route("/users", methods=["GET"], endpoint="users")
    @roles_required(*admins, Role.IT_SUPPORT)
    @handle_errors("Failed to load users")
    def list_users():
        role = parse_enum(Role, request.args.get("role"), None)
        archived = request.args.get("archived") in ("1", "true")
        rows = users.list_users(active=not archived, role=role, term=request.args.get("q"))
        return ok(users=dump(rows))

    @app.route("/users/by-role", methods=["GET"], endpoint="users_by_role")
    @roles_required(*admins)
    @handle_errors("Failed to load users")
    def users_by_role():
        role = parse_enum(Role, request.args.get("role"), None)
        if role is None:
            raise ValidationError("Unknown role")
        return ok(users=dump(users.list_by_role(role)))

    @app.route("/users/managers", methods=["GET"], endpoint="managers")
    @roles_required(Role.SUPER_ADMIN)
    @handle_errors("Failed to load program managers")
    def managers():
        return ok(users=dump(users.list_managers(current_role=current_role())))

    @app.route("/users", methods=["POST"], endpoint="register_user")
    @roles_required(*admins)
    @handle_errors("Failed to register user")
    def register_user():
        data = json_body()
        role = parse_enum(Role, data.get("role") or Role.TRAINEE.value, None)
        if role is None:
            return fail("Unknown role", 400)
        user = users.register(current_role=current_role(), name=data.get("name"), email=data.get("email"), role=role)
        return ok("User registered. Login details were sent by email.", 201, user=dump(user))

    @app.route("/users/<user_id>", methods=["GET"], endpoint="user_details")
    @roles_required(*admins, Role.IT_SUPPORT)
    @handle_errors("Failed to load user")
    def user_details(user_id: str):
        return ok(user=users.get_details(user_id))

    @app.route("/users/<user_id>", methods=["PATCH"], endpoint="update_user")
    @roles_required(Role.SUPER_ADMIN)
    @handle_errors("Failed to update user")
    def update_user(user_id: str):
        data = json_body()
        role = None
        if data.get("role") is not None:
            role = parse_enum(Role, data.get("role"), None)
            if role is None:
                return fail("Unknown role", 400)
        user = users.update_details(current_role=current_role(), user_id=user_id, name=data.get("name"), role=role)
        return ok("User updated", user=dump(user))

    @app.route("/users/<user_id>/status", methods=["PATCH"], endpoint="user_status")
    @roles_required(Role.SUPER_ADMIN)
    @handle_errors("Failed to update status")
    def user_status(user_id: str):
        is_active = json_body().get("isActive")
        if not isinstance(is_active, bool):
            raise ValidationError("isActive must be true or false")
        user = users.set_active(
            current_role=current_role(),
            current_user_id=current_user_id(),
            user_id=user_id,
            is_active=is_active,
        )
        return ok("User activated" if is_active else "User deactivated", user=dump(user))

    @app.route("/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    @roles_required(Role.SUPER_ADMIN)
    @handle_errors("Failed to delete user")
    def delete_user(user_id: str):
        users.delete_user(current_role=current_role(), current_user_id=current_user_id(), user_id=user_id)
        return ok("User deleted")

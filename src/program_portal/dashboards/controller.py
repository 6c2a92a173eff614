from __future__ import annotations

from flask import Flask, session

from ..common.web import current_role, dump, handle_errors, login_required, ok
from ..container import Container
from ..users.permissions import display_name, permissions_for


def register(app: Flask, container: Container) -> None:
    service = container.dashboard_service

    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    @handle_errors("Failed to load dashboard")
    def dashboard():
        role = current_role()
        data = service.build(role)
        return ok(
            user={"id": session.get("user_id"), "name": session.get("name"), "role": display_name(role)},
            permissions=sorted(p.value for p in permissions_for(role)),
            dashboard=dump(data),
        )

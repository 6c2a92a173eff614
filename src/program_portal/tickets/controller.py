from __future__ import annotations

from flask import Flask, request

from ..common.web import current_role, dump, handle_errors, json_body, login_required, ok, roles_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.ticket_service

    @app.route("/tickets", methods=["GET"], endpoint="tickets")
    @login_required
    @handle_errors("Failed to load tickets")
    def tickets():
        fetched = service.list_tickets()
        rows = service.narrow(
            fetched,
            status=request.args.get("status"),
            priority=request.args.get("priority"),
            term=request.args.get("q"),
        )
        return ok(tickets=dump(rows), stats=service.stats(fetched))

    @app.route("/tickets", methods=["POST"], endpoint="create_ticket")
    @login_required
    @handle_errors("Failed to submit ticket")
    def create_ticket():
        data = json_body()
        ticket = service.create_ticket(
            title=data.get("title"),
            description=data.get("description"),
            category=data.get("category"),
            priority=data.get("priority"),
        )
        return ok("Ticket submitted", 201, ticket=dump(ticket))

    @app.route("/tickets/<ticket_id>", methods=["PATCH"], endpoint="update_ticket")
    @roles_required(Role.IT_SUPPORT, Role.SUPER_ADMIN)
    @handle_errors("Failed to update ticket")
    def update_ticket(ticket_id: str):
        data = json_body()
        ticket = service.update_ticket(
            current_role=current_role(),
            ticket_id=ticket_id,
            status=data.get("status"),
            priority=data.get("priority"),
            assigned_to=data.get("assignedTo"),
            resolution=data.get("resolution"),
        )
        return ok("Ticket updated", ticket=dump(ticket))

    @app.route("/tickets/<ticket_id>/comments", methods=["POST"], endpoint="comment_ticket")
    @login_required
    @handle_errors("Failed to add comment")
    def comment_ticket(ticket_id: str):
        ticket = service.add_comment(ticket_id=ticket_id, message=json_body().get("message"))
        return ok("Comment added", ticket=dump(ticket))

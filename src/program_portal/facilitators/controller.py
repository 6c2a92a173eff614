from __future__ import annotations

from flask import Flask, request

from ..common.web import current_role, dump, handle_errors, json_body, ok, roles_required
from ..core.enums import Role, parse_enum
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.facilitator_service
    managers = (Role.PROGRAM_MANAGER, Role.SUPER_ADMIN)

    @app.route("/facilitators", methods=["GET"], endpoint="facilitators")
    @roles_required(*managers)
    @handle_errors("Failed to load facilitators")
    def facilitators():
        rows = service.list_facilitators(status=request.args.get("status"), term=request.args.get("q"))
        return ok(facilitators=dump(rows))

    @app.route("/facilitators/candidates", methods=["GET"], endpoint="facilitator_candidates")
    @roles_required(*managers)
    @handle_errors("Failed to load candidates")
    def facilitator_candidates():
        role = parse_enum(Role, request.args.get("role"), Role.FACILITATOR)
        return ok(candidates=dump(service.candidates(role)))

    @app.route("/facilitators", methods=["POST"], endpoint="hire_facilitator")
    @roles_required(*managers)
    @handle_errors("Failed to hire facilitator")
    def hire_facilitator():
        data = json_body()
        result = service.hire(
            current_role=current_role(),
            name=data.get("name"),
            email=data.get("email"),
            program_id=data.get("programId"),
        )
        message = "Facilitator hired successfully"
        if result.assignment_error:
            message = f"Facilitator hired, but could not be assigned: {result.assignment_error}"
        return ok(message, 201, facilitator=dump(result.facilitator), assigned=result.assigned)

    @app.route("/facilitators/<facilitator_id>/assign", methods=["POST"], endpoint="assign_facilitator")
    @roles_required(*managers)
    @handle_errors("Failed to assign facilitator")
    def assign_facilitator(facilitator_id: str):
        program = service.assign(
            current_role=current_role(),
            facilitator_id=facilitator_id,
            program_id=json_body().get("programId"),
        )
        return ok("Facilitator assigned to program", program=dump(program))

    @app.route("/facilitators/<facilitator_id>/profile", methods=["PATCH"], endpoint="facilitator_profile")
    @roles_required(*managers)
    @handle_errors("Failed to update profile")
    def facilitator_profile(facilitator_id: str):
        data = json_body()
        facilitator = service.update_profile(
            current_role=current_role(),
            facilitator_id=facilitator_id,
            rating=data.get("rating"),
            phone=data.get("phone"),
            specialization=data.get("specialization"),
            experience=data.get("experience"),
            bio=data.get("bio"),
        )
        return ok("Profile updated", facilitator=dump(facilitator))

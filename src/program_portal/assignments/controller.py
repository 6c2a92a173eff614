from __future__ import annotations

from flask import Flask, request

from ..common.web import current_role, dump, handle_errors, json_body, login_required, ok, roles_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.assignment_service

    @app.route("/assignments", methods=["GET"], endpoint="my_assignments")
    @roles_required(Role.FACILITATOR, Role.TRAINEE)
    @handle_errors("Failed to load assignments")
    def my_assignments():
        rows = service.my_assignments(current_role=current_role(), term=request.args.get("q"))
        return ok(assignments=dump(rows))

    @app.route("/assignments/course/<course_id>", methods=["GET"], endpoint="course_assignments")
    @login_required
    @handle_errors("Failed to load assignments")
    def course_assignments(course_id: str):
        return ok(assignments=dump(service.for_course(course_id)))

    @app.route("/assignments/program/<program_id>", methods=["GET"], endpoint="program_assignments")
    @login_required
    @handle_errors("Failed to load assignments")
    def program_assignments(program_id: str):
        return ok(assignments=dump(service.for_program(program_id)))

    @app.route("/assignments", methods=["POST"], endpoint="create_assignment")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to create assignment")
    def create_assignment():
        data = json_body()
        assignment = service.create_assignment(
            current_role=current_role(),
            title=data.get("title"),
            description=data.get("description"),
            program_id=data.get("program"),
            course_id=data.get("course"),
            roadmap_id=data.get("roadmap"),
            due_date=data.get("dueDate"),
            max_grade=data.get("maxGrade", 100),
        )
        return ok("Assignment created", 201, assignment=dump(assignment))

    @app.route("/assignments/<assignment_id>", methods=["PATCH"], endpoint="update_assignment")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to update assignment")
    def update_assignment(assignment_id: str):
        data = json_body()
        assignment = service.update_assignment(
            current_role=current_role(),
            assignment_id=assignment_id,
            title=data.get("title"),
            description=data.get("description"),
            due_date=data.get("dueDate"),
            max_grade=data.get("maxGrade"),
            is_active=data.get("isActive"),
        )
        return ok("Assignment updated", assignment=dump(assignment))

    @app.route("/assignments/<assignment_id>", methods=["DELETE"], endpoint="delete_assignment")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to delete assignment")
    def delete_assignment(assignment_id: str):
        service.delete_assignment(current_role=current_role(), assignment_id=assignment_id)
        return ok("Assignment deleted")

    @app.route("/assignments/<assignment_id>/resend", methods=["POST"], endpoint="resend_assignment")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to notify trainees")
    def resend_assignment(assignment_id: str):
        result = service.resend_notifications(current_role=current_role(), assignment_id=assignment_id)
        return ok(
            f"Sent to {result.sent_count} of {result.total_count} trainees",
            sentCount=result.sent_count,
            totalCount=result.total_count,
        )

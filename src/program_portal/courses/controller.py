from __future__ import annotations

from flask import Flask, request

from ..common.web import current_role, dump, handle_errors, json_body, login_required, ok, roles_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.course_service

    @app.route("/courses", methods=["GET"], endpoint="my_courses")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to load courses")
    def my_courses():
        rows = service.my_courses(status=request.args.get("status"), term=request.args.get("q"))
        return ok(courses=dump(rows))

    @app.route("/courses", methods=["POST"], endpoint="create_course")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to upload course")
    def create_course():
        upload = request.files.get("courseDocument")
        course = service.create_course(
            current_role=current_role(),
            title=request.form.get("title"),
            description=request.form.get("description"),
            program_id=request.form.get("programId"),
            filename=upload.filename if upload else None,
            document=upload.stream if upload else None,
        )
        return ok("Course uploaded successfully", 201, course=dump(course))

    @app.route("/courses/pending", methods=["GET"], endpoint="pending_courses")
    @roles_required(Role.SUPER_ADMIN, Role.PROGRAM_MANAGER)
    @handle_errors("Failed to load pending courses")
    def pending_courses():
        return ok(courses=dump(service.pending_courses(current_role=current_role())))

    @app.route("/courses/program/<program_id>", methods=["GET"], endpoint="program_courses")
    @login_required
    @handle_errors("Failed to load courses")
    def program_courses(program_id: str):
        return ok(courses=dump(service.courses_for_program(program_id)))

    @app.route("/courses/<course_id>", methods=["PATCH"], endpoint="update_course")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to update course")
    def update_course(course_id: str):
        data = json_body()
        course = service.update_course(
            current_role=current_role(),
            course_id=course_id,
            title=data.get("title"),
            description=data.get("description"),
        )
        return ok("Course updated", course=dump(course))

    @app.route("/courses/<course_id>", methods=["DELETE"], endpoint="delete_course")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to delete course")
    def delete_course(course_id: str):
        service.delete_course(current_role=current_role(), course_id=course_id)
        return ok("Course deleted")

    @app.route("/courses/<course_id>/request-approval", methods=["POST"], endpoint="request_course_approval")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to submit course")
    def request_course_approval(course_id: str):
        course = service.request_approval_by_id(current_role=current_role(), course_id=course_id)
        return ok("Course submitted for approval", course=dump(course))

    @app.route("/courses/<course_id>/approve", methods=["POST"], endpoint="approve_course")
    @roles_required(Role.SUPER_ADMIN, Role.PROGRAM_MANAGER)
    @handle_errors("Failed to approve course")
    def approve_course(course_id: str):
        course = service.approve(current_role=current_role(), course_id=course_id)
        return ok("Course approved", course=dump(course))

    @app.route("/courses/<course_id>/reject", methods=["POST"], endpoint="reject_course")
    @roles_required(Role.SUPER_ADMIN, Role.PROGRAM_MANAGER)
    @handle_errors("Failed to reject course")
    def reject_course(course_id: str):
        course = service.reject(current_role=current_role(), course_id=course_id, reason=json_body().get("reason"))
        return ok("Course rejected", course=dump(course))

    @app.route("/courses/<course_id>/activate", methods=["POST"], endpoint="activate_course")
    @roles_required(Role.SUPER_ADMIN, Role.PROGRAM_MANAGER)
    @handle_errors("Failed to activate course")
    def activate_course(course_id: str):
        course = service.activate(current_role=current_role(), course_id=course_id)
        return ok("Course activated", course=dump(course))

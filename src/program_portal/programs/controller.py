from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.listing import paginate
from ..common.web import arg_int, current_role, dump, handle_errors, json_body, login_required, ok, roles_required
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.program_service
    managers = (Role.SUPER_ADMIN, Role.PROGRAM_MANAGER)

    @app.route("/programs", methods=["GET"], endpoint="programs")
    @login_required
    @handle_errors("Failed to load programs")
    def programs():
        rows = service.list_programs(status=request.args.get("status"), term=request.args.get("q"))
        page = paginate(rows, arg_int("page", 1), arg_int("pageSize", DEFAULT_PAGE_SIZE))
        return ok(
            programs=dump(page.items),
            page=page.page,
            totalPages=page.total_pages,
            total=page.total,
            stats=service.status_counts(rows),
        )

    @app.route("/programs/archived", methods=["GET"], endpoint="archived_programs")
    @roles_required(*managers)
    @handle_errors("Failed to load archived programs")
    def archived_programs():
        return ok(programs=dump(service.list_archived(current_role=current_role())))

    @app.route("/programs/pending", methods=["GET"], endpoint="pending_programs")
    @roles_required(Role.SUPER_ADMIN)
    @handle_errors("Failed to load pending programs")
    def pending_programs():
        return ok(programs=dump(service.list_pending_approval()))

    @app.route("/programs", methods=["POST"], endpoint="create_program")
    @roles_required(*managers)
    @handle_errors("Failed to create program")
    def create_program():
        data = json_body()
        program = service.create_program(
            current_role=current_role(),
            name=data.get("name"),
            description=data.get("description"),
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
        )
        return ok("Program created successfully", 201, program=dump(program))

    @app.route("/programs/<program_id>", methods=["GET"], endpoint="program_details")
    @login_required
    @handle_errors("Failed to load program")
    def program_details(program_id: str):
        program = service.get_program(program_id)
        return ok(program=dump(program), stats=dump(service.get_stats(program_id)))

    @app.route("/programs/<program_id>", methods=["PUT"], endpoint="update_program")
    @roles_required(*managers)
    @handle_errors("Failed to update program")
    def update_program(program_id: str):
        data = json_body()
        program = service.update_program(
            current_role=current_role(),
            program_id=program_id,
            name=data.get("name"),
            description=data.get("description"),
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
        )
        return ok("Program updated", program=dump(program))

    @app.route("/programs/<program_id>", methods=["DELETE"], endpoint="delete_program")
    @roles_required(*managers)
    @handle_errors("Failed to delete program")
    def delete_program(program_id: str):
        service.delete_program(current_role=current_role(), program_id=program_id)
        return ok("Program deleted")

    @app.route("/programs/<program_id>/request-approval", methods=["POST"], endpoint="request_program_approval")
    @roles_required(Role.PROGRAM_MANAGER)
    @handle_errors("Failed to submit program")
    def request_program_approval(program_id: str):
        program = service.request_approval(current_role=current_role(), program_id=program_id)
        return ok("Program submitted for approval", program=dump(program))

    @app.route("/programs/<program_id>/approve", methods=["POST"], endpoint="approve_program")
    @roles_required(Role.SUPER_ADMIN)
    @handle_errors("Failed to approve program")
    def approve_program(program_id: str):
        program = service.approve(current_role=current_role(), program_id=program_id)
        return ok("Program approved", program=dump(program))

    @app.route("/programs/<program_id>/reject", methods=["POST"], endpoint="reject_program")
    @roles_required(Role.SUPER_ADMIN)
    @handle_errors("Failed to reject program")
    def reject_program(program_id: str):
        program = service.reject(current_role=current_role(), program_id=program_id, reason=json_body().get("reason"))
        return ok("Program rejected", program=dump(program))

    @app.route("/programs/<program_id>/trainees", methods=["POST"], endpoint="enroll_trainee")
    @roles_required(Role.PROGRAM_MANAGER)
    @handle_errors("Failed to enroll trainee")
    def enroll_trainee(program_id: str):
        program = service.enroll_trainee(
            current_role=current_role(), program_id=program_id, trainee_id=json_body().get("traineeId")
        )
        return ok("Trainee enrolled", program=dump(program))

    @app.route("/programs/<program_id>/trainees/<trainee_id>", methods=["DELETE"], endpoint="unenroll_trainee")
    @roles_required(Role.PROGRAM_MANAGER)
    @handle_errors("Failed to unenroll trainee")
    def unenroll_trainee(program_id: str, trainee_id: str):
        program = service.unenroll_trainee(current_role=current_role(), program_id=program_id, trainee_id=trainee_id)
        return ok("Trainee removed from program", program=dump(program))

    @app.route("/programs/<program_id>/facilitators", methods=["POST"], endpoint="enroll_facilitator")
    @roles_required(Role.PROGRAM_MANAGER)
    @handle_errors("Failed to assign facilitator")
    def enroll_facilitator(program_id: str):
        program = service.enroll_facilitator(
            current_role=current_role(), program_id=program_id, facilitator_id=json_body().get("facilitatorId")
        )
        return ok("Facilitator assigned", program=dump(program))

    @app.route("/programs/<program_id>/manager", methods=["POST"], endpoint="assign_manager")
    @roles_required(Role.SUPER_ADMIN)
    @handle_errors("Failed to assign manager")
    def assign_manager(program_id: str):
        program = service.assign_manager(
            current_role=current_role(), program_id=program_id, manager_id=json_body().get("managerId")
        )
        return ok("Program manager assigned", program=dump(program))

    @app.route("/programs/<program_id>/complete", methods=["POST"], endpoint="complete_program")
    @roles_required(*managers)
    @handle_errors("Failed to complete program")
    def complete_program(program_id: str):
        program = service.mark_completed(current_role=current_role(), program_id=program_id)
        return ok("Program marked as completed", program=dump(program))

    @app.route("/programs/<program_id>/reactivate", methods=["POST"], endpoint="reactivate_program")
    @roles_required(*managers)
    @handle_errors("Failed to reactivate program")
    def reactivate_program(program_id: str):
        program = service.reactivate(
            current_role=current_role(), program_id=program_id, new_end_date=json_body().get("newEndDate")
        )
        return ok("Program reactivated", program=dump(program))

    @app.route("/programs/<program_id>/archive", methods=["POST"], endpoint="archive_program")
    @roles_required(*managers)
    @handle_errors("Failed to archive program")
    def archive_program(program_id: str):
        program = service.archive(current_role=current_role(), program_id=program_id)
        return ok("Program archived", program=dump(program))

    @app.route("/programs/<program_id>/unarchive", methods=["POST"], endpoint="unarchive_program")
    @roles_required(*managers)
    @handle_errors("Failed to restore program")
    def unarchive_program(program_id: str):
        program = service.unarchive(current_role=current_role(), program_id=program_id)
        return ok("Program restored", program=dump(program))

    @app.route("/programs/<program_id>/report.pdf", methods=["GET"], endpoint="program_report_pdf")
    @roles_required(*managers)
    @handle_errors("Failed to download report")
    def program_report_pdf(program_id: str):
        pdf = service.report_pdf(current_role=current_role(), program_id=program_id)
        return send_file(
            io.BytesIO(pdf or b""),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=f"program-report-{program_id}.pdf",
        )

from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.web import arg_date, current_role, handle_errors, json_body, roles_required
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def _send(export):
    return send_file(
        io.BytesIO(export.content),
        mimetype=export.mimetype,
        as_attachment=True,
        download_name=export.filename,
    )


def register(app: Flask, container: Container) -> None:
    service = container.report_service
    managers = (Role.SUPER_ADMIN, Role.PROGRAM_MANAGER)

    @app.route("/export/programs/<fmt>", methods=["GET"], endpoint="export_programs")
    @roles_required(*managers)
    @handle_errors("Failed to export programs")
    def export_programs(fmt: str):
        return _send(service.export_programs(current_role=current_role(), fmt=fmt))

    @app.route("/export/archived/<fmt>", methods=["GET"], endpoint="export_archived")
    @roles_required(*managers)
    @handle_errors("Failed to export archived programs")
    def export_archived(fmt: str):
        return _send(service.export_programs(current_role=current_role(), fmt=fmt, archived=True))

    @app.route("/export/program/<program_id>", methods=["GET"], endpoint="export_program")
    @roles_required(*managers)
    @handle_errors("Failed to export program")
    def export_program(program_id: str):
        return _send(service.export_program(current_role=current_role(), program_id=program_id))

    @app.route("/export/bulk", methods=["POST"], endpoint="export_bulk")
    @roles_required(*managers)
    @handle_errors("Failed to export programs")
    def export_bulk():
        data = json_body()
        return _send(service.bulk_export(current_role=current_role(), fmt=data.get("format"), filters=data.get("filters")))

    @app.route("/export/custom", methods=["POST"], endpoint="export_custom")
    @roles_required(*managers)
    @handle_errors("Failed to export programs")
    def export_custom():
        data = json_body()
        export = service.custom_export(
            current_role=current_role(),
            fmt=data.get("format"),
            template=data.get("template"),
            data_type=data.get("dataType"),
        )
        return _send(export)

    @app.route("/reports/attendance/<program_id>/export", methods=["GET"], endpoint="export_attendance_report")
    @roles_required(*managers)
    @handle_errors("Failed to export attendance report")
    def export_attendance_report(program_id: str):
        start, end = arg_date("startDate"), arg_date("endDate")
        if start is None or end is None:
            raise ValidationError("Start date and end date are required")
        export = service.attendance_report_file(
            current_role=current_role(),
            program_id=program_id,
            start=start,
            end=end,
            fmt=request.args.get("format", "csv"),
        )
        return _send(export)

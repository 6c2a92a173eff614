from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.listing import filter_by_status
from ..common.web import (
    arg_date,
    current_role,
    dump,
    fail,
    handle_errors,
    json_body,
    login_required,
    ok,
    roles_required,
)
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container
from .qr import decode_data_url, render_qr_png
from .workflow import SessionWorkflow


def _session_row(session) -> dict:
    row = dump(session)
    row["actions"] = [a.value for a in SessionWorkflow.available_actions(session)]
    return row


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    # ------------------------------------------------------------------
    # Facilitator
    # ------------------------------------------------------------------

    @app.route("/facilitator/sessions", methods=["GET"], endpoint="facilitator_sessions")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to load sessions")
    def facilitator_sessions():
        sessions = service.list_facilitator_sessions(status=request.args.get("status"))
        return ok(
            sessions=[_session_row(s) for s in sessions],
            stats=service.session_stats(sessions),
        )

    @app.route("/facilitator/sessions", methods=["POST"], endpoint="create_session")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to create session")
    def create_session():
        data = json_body()
        created = service.create_session(
            current_role=current_role(),
            type=data.get("type"),
            program_id=data.get("programId"),
            title=data.get("title"),
            description=data.get("description"),
            start_time=data.get("startTime"),
            duration=data.get("duration"),
        )
        return ok("Session created successfully", 201, session=_session_row(created))

    @app.route("/facilitator/sessions/<session_id>", methods=["GET"], endpoint="session_details")
    @login_required
    @handle_errors("Failed to load session")
    def session_details(session_id: str):
        details = service.get_session_details(session_id)
        return ok(session=_session_row(details.session), attendanceCount=details.attendance_count)

    @app.route("/facilitator/sessions/<session_id>/start", methods=["POST"], endpoint="start_session")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to start session")
    def start_session(session_id: str):
        data = json_body()
        started = service.start_session(
            current_role=current_role(),
            session_id=session_id,
            session_type=data.get("type"),
            status=data.get("status"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )
        return ok(started.message, session=_session_row(started.session))

    @app.route("/facilitator/sessions/<session_id>/qr", methods=["GET"], endpoint="session_qr")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to load QR code")
    def session_qr(session_id: str):
        """PNG of the session QR code; rendered locally when the server sends none."""

        data_url = service.open_qr(current_role=current_role(), session_id=session_id)
        png = decode_data_url(data_url)
        if png is None:
            png = render_qr_png(data_url or session_id)
        return send_file(io.BytesIO(png), mimetype="image/png", download_name=f"session-{session_id}.png")

    @app.route("/facilitator/sessions/<session_id>/end", methods=["POST"], endpoint="end_session")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to end session")
    def end_session(session_id: str):
        ended = service.end_session(current_role=current_role(), session_id=session_id)
        return ok("Session ended", session=_session_row(ended))

    @app.route("/facilitator/sessions/<session_id>/attendance", methods=["GET"], endpoint="session_attendance")
    @roles_required(Role.FACILITATOR, Role.PROGRAM_MANAGER, Role.SUPER_ADMIN)
    @handle_errors("Failed to load attendance")
    def session_attendance(session_id: str):
        records = service.session_attendance(session_id)
        return ok(records=dump(records), stats=service.record_stats(records))

    @app.route("/facilitator/attendance/mark", methods=["POST"], endpoint="mark_manual")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to mark attendance")
    def mark_manual():
        data = json_body()
        result = service.mark_in_session(
            current_role=current_role(),
            method="manual",
            session_id=data.get("sessionId"),
            user_id=data.get("userId"),
            status=data.get("status"),
            reason=data.get("reason"),
        )
        return ok(result.message, record=dump(result.record))

    # ------------------------------------------------------------------
    # Trainee
    # ------------------------------------------------------------------

    @app.route("/trainee/sessions", methods=["GET"], endpoint="trainee_sessions")
    @roles_required(Role.TRAINEE)
    @handle_errors("Failed to load sessions")
    def trainee_sessions():
        sessions = service.list_trainee_sessions(status=request.args.get("status"))
        return ok(sessions=dump(sessions))

    @app.route("/trainee/attendance", methods=["POST"], endpoint="mark_attendance")
    @roles_required(Role.TRAINEE)
    @handle_errors("Failed to mark attendance")
    def mark_attendance():
        data = json_body()
        mark = service.mark_in_session if data.get("sessionId") else service.mark_attendance
        result = mark(
            current_role=current_role(),
            method=data.get("method"),
            session_type=data.get("type"),
            session_id=data.get("sessionId"),
            qr_data=data.get("qrData"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )
        return ok(result.message, method=result.method.value, record=dump(result.record))

    @app.route("/trainee/attendance/qr-image", methods=["POST"], endpoint="mark_attendance_qr_image")
    @roles_required(Role.TRAINEE)
    @handle_errors("Failed to mark attendance")
    def mark_attendance_qr_image():
        upload = request.files.get("image")
        if upload is None or not upload.filename:
            return fail("Please upload a photo of the QR code.", 400)
        result = service.mark_with_qr_image(current_role=current_role(), image=upload.stream)
        return ok(result.message, record=dump(result.record))

    @app.route("/trainee/attendance/history", methods=["GET"], endpoint="attendance_history")
    @roles_required(Role.TRAINEE)
    @handle_errors("Failed to load attendance history")
    def attendance_history():
        all_records = service.my_history()
        records = filter_by_status(all_records, request.args.get("status"))
        return ok(records=dump(records), stats=service.record_stats(all_records))

    # ------------------------------------------------------------------
    # Manager reports
    # ------------------------------------------------------------------

    def _report_window():
        start, end = arg_date("startDate"), arg_date("endDate")
        if start is None or end is None:
            raise ValidationError("Start date and end date are required")
        return start, end

    @app.route("/reports/attendance/<program_id>", methods=["GET"], endpoint="attendance_report")
    @roles_required(Role.SUPER_ADMIN, Role.PROGRAM_MANAGER)
    @handle_errors("Failed to load attendance report")
    def attendance_report(program_id: str):
        start, end = _report_window()
        records = service.program_report(
            current_role=current_role(), program_id=program_id, start_date=start, end_date=end
        )
        return ok(records=dump(records), stats=service.record_stats(records))

    @app.route("/reports/attendance/<program_id>/summary", methods=["GET"], endpoint="attendance_summary")
    @roles_required(Role.SUPER_ADMIN, Role.PROGRAM_MANAGER)
    @handle_errors("Failed to load attendance summary")
    def attendance_summary(program_id: str):
        start, end = _report_window()
        total, report = service.program_summary(
            current_role=current_role(), program_id=program_id, start_date=start, end_date=end
        )
        return ok(totalSessions=total, report=dump(report))

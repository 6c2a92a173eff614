from __future__ import annotations

import io
from datetime import date

import pandas as pd
import pytest

from program_portal.attendance.model import AttendanceRecord
from program_portal.core.enums import Role
from program_portal.core.exceptions import AuthorizationError, ValidationError
from program_portal.reports.rest_export_repository import RestExportRepository
from program_portal.reports.service import ReportService


def _record(user: str, name: str, day: str, status: str, **extra) -> AttendanceRecord:
    return AttendanceRecord.from_api(
        {
            "_id": f"{user}-{day}",
            "userId": {"_id": user, "name": name},
            "sessionId": {"_id": "s1", "title": "Morning stand-up"},
            "date": day,
            "status": status,
            **extra,
        }
    )


class FakeAttendanceRepo:
    def __init__(self, rows):
        self._rows = rows
        self.last_args = None

    def program_report(self, program_id, *, start_date, end_date):
        self.last_args = {"program_id": program_id, "start_date": start_date, "end_date": end_date}
        return self._rows


ROWS = [
    _record("t1", "Ann", "2025-03-04", "Present", method="qr_code", checkIn="2025-03-04T09:02:00Z"),
    _record("t2", "Ben", "2025-03-03", "Absent"),
    _record("t1", "Ann", "2025-03-03", "Late", method="geolocation"),
    _record("t2", "Ben", "2025-03-04", "Excused", reason="Medical"),
]


def test_report_rows_and_per_student_summary():
    repo = FakeAttendanceRepo(ROWS)

    report = ReportService(None, repo).build_attendance_report(
        program_id="p1", start=date(2025, 3, 1), end=date(2025, 3, 31)
    )

    assert repo.last_args == {"program_id": "p1", "start_date": date(2025, 3, 1), "end_date": date(2025, 3, 31)}
    assert [(r["date"], r["name"]) for r in report.rows] == [
        ("2025-03-03", "Ann"),
        ("2025-03-03", "Ben"),
        ("2025-03-04", "Ann"),
        ("2025-03-04", "Ben"),
    ]
    assert report.rows[2]["check_in"] == "09:02"
    assert report.rows[2]["method"] == "qr_code"
    assert report.rows[3]["reason"] == "Medical"

    ann, ben = report.summary
    assert (ann["name"], ann["present"], ann["late"], ann["attendance_rate"]) == ("Ann", 1, 1, 100.0)
    assert (ben["absent"], ben["excused"], ben["total"], ben["attendance_rate"]) == (1, 1, 2, 0.0)


def test_report_window_must_be_ordered():
    repo = FakeAttendanceRepo([])

    with pytest.raises(ValidationError):
        ReportService(None, repo).build_attendance_report(program_id="p1", start=date(2025, 3, 5), end=date(2025, 3, 1))

    assert repo.last_args is None


def test_csv_export_has_header_and_bom():
    file = ReportService(None, FakeAttendanceRepo(ROWS)).attendance_report_file(
        current_role=Role.PROGRAM_MANAGER, program_id="p1", start=date(2025, 3, 1), end=date(2025, 3, 31)
    )

    text = file.content.decode("utf-8-sig")
    assert file.filename == "attendance_p1_20250301_20250331.csv"
    assert text.splitlines()[0] == "date,user_id,name,session,method,check_in,status,reason"
    assert len(text.splitlines()) == 5


def test_excel_export_has_both_sheets():
    file = ReportService(None, FakeAttendanceRepo(ROWS)).attendance_report_file(
        current_role=Role.SUPER_ADMIN, program_id="p1", start=date(2025, 3, 1), end=date(2025, 3, 31), fmt="excel"
    )

    sheets = pd.read_excel(io.BytesIO(file.content), sheet_name=None)
    assert set(sheets) == {"Attendance", "Summary"}
    assert len(sheets["Summary"]) == 2


def test_report_export_is_manager_only():
    with pytest.raises(AuthorizationError):
        ReportService(None, FakeAttendanceRepo(ROWS)).attendance_report_file(
            current_role=Role.FACILITATOR, program_id="p1", start=date(2025, 3, 1), end=date(2025, 3, 31)
        )


def test_server_export_downloads_raw_bytes(conn, http):
    http.route("GET", "/export/archived/excel", content=b"PK\x03\x04")

    file = ReportService(RestExportRepository(conn), None).export_programs(
        current_role=Role.SUPER_ADMIN, fmt="EXCEL", archived=True
    )

    assert file.content == b"PK\x03\x04"
    assert file.filename.startswith("archived_") and file.filename.endswith(".xlsx")


def test_custom_export_needs_columns(conn, http):
    with pytest.raises(ValidationError):
        ReportService(RestExportRepository(conn), None).custom_export(
            current_role=Role.SUPER_ADMIN, fmt="pdf", template={"columns": []}
        )

    assert http.calls == []

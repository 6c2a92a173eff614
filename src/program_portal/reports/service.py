from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.listing import percentage
from ..common.validators import require_date_order, require_id
from ..core.enums import AttendanceStatus, Role, parse_enum
from ..core.exceptions import AuthorizationError, ValidationError
from .model import ExportFile, ExportFormat, ExportScope, ReportData
from .repository import ExportRepository
from .writers import ROW_FIELDS, SUMMARY_FIELDS, write_csv, write_excel

logger = logging.getLogger(__name__)

EXPORTERS = {Role.SUPER_ADMIN, Role.PROGRAM_MANAGER}

CSV_MIMETYPE = "text/csv"


def _format(value) -> ExportFormat:
    fmt = parse_enum(ExportFormat, (value or "").lower() if isinstance(value, str) else value, None)
    if fmt is None:
        raise ValidationError("Format must be pdf or excel")
    return fmt


def _scope(value) -> ExportScope:
    scope = parse_enum(ExportScope, value or ExportScope.PROGRAMS.value, None)
    if scope is None:
        raise ValidationError("Data type must be programs or archived")
    return scope


class ReportService:
    def __init__(self, exports: ExportRepository, attendance: AttendanceRepository):
        self._exports = exports
        self._attendance = attendance

    def _check(self, current_role: Role) -> None:
        if current_role not in EXPORTERS:
            raise AuthorizationError("You are not allowed to export reports")

    # Server-rendered exports

    def export_programs(self, *, current_role: Role, fmt, archived: bool = False) -> ExportFile:
        self._check(current_role)
        fmt = _format(fmt)
        scope = ExportScope.ARCHIVED if archived else ExportScope.PROGRAMS
        content = self._exports.export_list(scope, fmt)
        stamp = date.today().strftime("%Y%m%d")
        return ExportFile(content, f"{scope.value}_{stamp}.{fmt.extension}", fmt.mimetype)

    def export_program(self, *, current_role: Role, program_id: str) -> ExportFile:
        self._check(current_role)
        program_id = require_id(program_id, "Program")
        content = self._exports.export_program_pdf(program_id)
        return ExportFile(content, f"program_{program_id}.pdf", ExportFormat.PDF.mimetype)

    def bulk_export(self, *, current_role: Role, fmt, filters: Optional[dict] = None) -> ExportFile:
        self._check(current_role)
        fmt = _format(fmt)
        content = self._exports.bulk(fmt, dict(filters or {}))
        return ExportFile(content, f"programs_bulk.{fmt.extension}", fmt.mimetype)

    def custom_export(self, *, current_role: Role, fmt, template: Optional[dict], data_type=None) -> ExportFile:
        self._check(current_role)
        fmt = _format(fmt)
        if not template or not template.get("columns"):
            raise ValidationError("Choose at least one column to export")
        scope = _scope(data_type)
        content = self._exports.custom(fmt, template, scope)
        return ExportFile(content, f"{scope.value}_custom.{fmt.extension}", fmt.mimetype)

    # Local attendance report

    def build_attendance_report(self, *, program_id: str, start: date, end: date) -> ReportData:
        require_date_order(start, end)
        records = self._attendance.program_report(require_id(program_id, "Program"), start_date=start, end_date=end)

        summary_map: dict[str, dict] = {}
        out_rows: list[dict] = []

        for r in records:
            out_rows.append(
                {
                    "date": r.attendance_date.strftime("%Y-%m-%d") if r.attendance_date else "-",
                    "user_id": r.user_id or "",
                    "name": r.user_name,
                    "session": r.session_title or "-",
                    "method": r.method.value if r.method else "-",
                    "check_in": r.check_in.strftime("%H:%M") if r.check_in else "-",
                    "status": r.status.value,
                    "reason": r.reason or "",
                }
            )

            key = r.user_id or r.user_name
            s = summary_map.get(key)
            if not s:
                s = {"user_id": r.user_id or "", "name": r.user_name, "present": 0, "late": 0, "absent": 0, "excused": 0}
                summary_map[key] = s
            s[r.status.value.lower()] += 1

        summary = []
        for s in summary_map.values():
            total = s["present"] + s["late"] + s["absent"] + s["excused"]
            s["total"] = total
            s["attendance_rate"] = percentage(s["present"] + s["late"], total)
            summary.append(s)

        summary.sort(key=lambda x: x["attendance_rate"], reverse=True)
        out_rows.sort(key=lambda x: (x["date"], x["name"]))
        return ReportData(rows=out_rows, summary=summary)

    def attendance_report_file(
        self, *, current_role: Role, program_id: str, start: date, end: date, fmt: str = "csv"
    ) -> ExportFile:
        self._check(current_role)
        data = self.build_attendance_report(program_id=program_id, start=start, end=end)
        stem = f"attendance_{program_id}_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}"
        if fmt == "excel":
            return ExportFile(write_excel(data), f"{stem}.xlsx", ExportFormat.EXCEL.mimetype)
        if fmt == "summary":
            return ExportFile(write_csv(data.summary, SUMMARY_FIELDS), f"{stem}_summary.csv", CSV_MIMETYPE)
        if fmt != "csv":
            raise ValidationError("Format must be csv, summary or excel")
        logger.info("Attendance report for %s: %d rows", program_id, len(data.rows))
        return ExportFile(write_csv(data.rows, ROW_FIELDS), f"{stem}.csv", CSV_MIMETYPE)

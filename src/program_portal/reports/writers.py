from __future__ import annotations

import csv
import io
from typing import Sequence

import pandas as pd

from .model import ReportData

ROW_FIELDS = [
    "date",
    "user_id",
    "name",
    "session",
    "method",
    "check_in",
    "status",
    "reason",
]

SUMMARY_FIELDS = [
    "user_id",
    "name",
    "present",
    "late",
    "absent",
    "excused",
    "total",
    "attendance_rate",
]


def write_csv(rows: Sequence[dict], fieldnames: Sequence[str]) -> bytes:
    """CSV bytes with a BOM so spreadsheet apps detect UTF-8."""

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=list(fieldnames), extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")


def write_excel(data: ReportData) -> bytes:
    """Two-sheet workbook: the flat records and the per-student summary."""

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        pd.DataFrame(data.rows, columns=ROW_FIELDS).to_excel(writer, index=False, sheet_name="Attendance")
        pd.DataFrame(data.summary, columns=SUMMARY_FIELDS).to_excel(writer, index=False, sheet_name="Summary")
    return output.getvalue()

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ExportFormat(str, Enum):
    PDF = "pdf"
    EXCEL = "excel"

    @property
    def mimetype(self) -> str:
        if self is ExportFormat.PDF:
            return "application/pdf"
        return "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    @property
    def extension(self) -> str:
        return "pdf" if self is ExportFormat.PDF else "xlsx"


class ExportScope(str, Enum):
    PROGRAMS = "programs"
    ARCHIVED = "archived"


@dataclass(frozen=True)
class ExportFile:
    content: bytes
    filename: str
    mimetype: str


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]

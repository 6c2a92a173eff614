from __future__ import annotations

from typing import Protocol

from .model import ExportFormat, ExportScope


class ExportRepository(Protocol):
    def export_list(self, scope: ExportScope, fmt: ExportFormat) -> bytes:
        raise NotImplementedError

    def export_program_pdf(self, program_id: str) -> bytes:
        raise NotImplementedError

    def bulk(self, fmt: ExportFormat, filters: dict) -> bytes:
        raise NotImplementedError

    def custom(self, fmt: ExportFormat, template: dict, scope: ExportScope) -> bytes:
        raise NotImplementedError

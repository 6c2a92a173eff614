from __future__ import annotations

from ..api.connection import ApiConnection
from .model import ExportFormat, ExportScope


class RestExportRepository:
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def export_list(self, scope: ExportScope, fmt: ExportFormat) -> bytes:
        return self._conn.get(f"/export/{scope.value}/{fmt.value}", raw=True) or b""

    def export_program_pdf(self, program_id: str) -> bytes:
        return self._conn.get(f"/export/programs/{program_id}/pdf", raw=True) or b""

    def bulk(self, fmt: ExportFormat, filters: dict) -> bytes:
        return self._conn.post("/export/bulk", json={"format": fmt.value, "filters": filters}, raw=True) or b""

    def custom(self, fmt: ExportFormat, template: dict, scope: ExportScope) -> bytes:
        body = {"format": fmt.value, "template": template, "dataType": scope.value}
        return self._conn.post("/export/custom", json=body, raw=True) or b""

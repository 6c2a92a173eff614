from __future__ import annotations

from ..api.connection import ApiConnection
from .model import AppSettings


class RestSettingsRepository:
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def get(self) -> AppSettings:
        return AppSettings.from_api(self._conn.get("/settings") or {})

    def update(self, payload: dict) -> AppSettings:
        return AppSettings.from_api(self._conn.patch("/settings", json=payload) or {})

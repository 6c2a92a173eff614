from __future__ import annotations

from typing import Sequence

from ..api.connection import ApiConnection
from ..api.rest_base import as_list
from ..users.model import User
from .model import DashboardStats, FacilitatorStats


class RestDashboardRepository:
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def stats(self) -> DashboardStats:
        return DashboardStats.from_api(self._conn.get("/dashboard/stats") or {})

    def facilitator_stats(self) -> FacilitatorStats:
        return FacilitatorStats.from_api(self._conn.get("/dashboard/facilitator-stats") or {})

    def onboarded_users(self, *, limit: int) -> Sequence[User]:
        data = self._conn.get("/users/manage/onboarded", params={"limit": limit})
        return [User.from_api(u) for u in as_list(data)]

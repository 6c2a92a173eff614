from __future__ import annotations

from typing import Protocol, Sequence

from ..users.model import User
from .model import DashboardStats, FacilitatorStats


class DashboardRepository(Protocol):
    def stats(self) -> DashboardStats:
        raise NotImplementedError

    def facilitator_stats(self) -> FacilitatorStats:
        raise NotImplementedError

    def onboarded_users(self, *, limit: int) -> Sequence[User]:
        raise NotImplementedError

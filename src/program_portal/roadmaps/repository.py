from __future__ import annotations

from typing import Protocol, Sequence

from .model import RoadmapWeek


class RoadmapRepository(Protocol):
    def create_week(self, payload: dict) -> RoadmapWeek:
        raise NotImplementedError

    def program_roadmap(self, program_id: str) -> Sequence[RoadmapWeek]:
        raise NotImplementedError

    def get_week(self, week_id: str) -> RoadmapWeek:
        raise NotImplementedError

    def update_week(self, week_id: str, payload: dict) -> RoadmapWeek:
        raise NotImplementedError

    def delete_week(self, week_id: str) -> None:
        raise NotImplementedError

    def set_topic_status(self, week_id: str, *, topic_index: int, completed: bool) -> RoadmapWeek:
        raise NotImplementedError

    def submit(self, week_id: str) -> RoadmapWeek:
        raise NotImplementedError

    def review(self, week_id: str, *, action: str, feedback: str) -> RoadmapWeek:
        raise NotImplementedError

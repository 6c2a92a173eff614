from __future__ import annotations

from typing import Sequence

from ..api.connection import ApiConnection
from ..api.rest_base import as_list
from .model import RoadmapWeek


class RestRoadmapRepository:
    def __init__(self, conn: ApiConnection):
        self._conn = conn

    def create_week(self, payload: dict) -> RoadmapWeek:
        return RoadmapWeek.from_api(self._conn.post("/roadmaps", json=payload) or {})

    def program_roadmap(self, program_id: str) -> Sequence[RoadmapWeek]:
        return [RoadmapWeek.from_api(w) for w in as_list(self._conn.get(f"/roadmaps/program/{program_id}"))]

    def get_week(self, week_id: str) -> RoadmapWeek:
        return RoadmapWeek.from_api(self._conn.get(f"/roadmaps/week/{week_id}") or {})

    def update_week(self, week_id: str, payload: dict) -> RoadmapWeek:
        return RoadmapWeek.from_api(self._conn.patch(f"/roadmaps/week/{week_id}", json=payload) or {})

    def delete_week(self, week_id: str) -> None:
        self._conn.delete(f"/roadmaps/week/{week_id}")

    def set_topic_status(self, week_id: str, *, topic_index: int, completed: bool) -> RoadmapWeek:
        data = self._conn.patch(
            f"/roadmaps/week/{week_id}/topic-status",
            json={"topicIndex": topic_index, "completed": completed},
        )
        return RoadmapWeek.from_api(data or {})

    def submit(self, week_id: str) -> RoadmapWeek:
        return RoadmapWeek.from_api(self._conn.post(f"/roadmaps/week/{week_id}/submit") or {})

    def review(self, week_id: str, *, action: str, feedback: str) -> RoadmapWeek:
        data = self._conn.post(f"/roadmaps/week/{week_id}/approve", json={"action": action, "feedback": feedback})
        return RoadmapWeek.from_api(data or {})

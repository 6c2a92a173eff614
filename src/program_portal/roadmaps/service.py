from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.listing import percentage
from ..common.validators import require_id, require_non_empty
from ..core.enums import ApprovalStatus, Role, parse_enum
from ..core.exceptions import AuthorizationError, ValidationError
from .model import DailyTopic, RoadmapWeek, TopicType, Weekday
from .repository import RoadmapRepository

logger = logging.getLogger(__name__)

PLANNERS = {Role.FACILITATOR, Role.PROGRAM_MANAGER, Role.SUPER_ADMIN}
REVIEWERS = {Role.PROGRAM_MANAGER, Role.SUPER_ADMIN}

APPROVE = "approve"
REJECT = "reject"


@dataclass(frozen=True)
class WeekPlan:
    program_id: str
    week_number: int
    title: str
    start_date: date
    objectives: list[str]
    topics: list[DailyTopic]

    def to_api(self) -> dict:
        return {
            "program": self.program_id,
            "weekNumber": self.week_number,
            "title": self.title,
            "startDate": self.start_date.isoformat(),
            "objectives": self.objectives,
            "topics": [t.to_api() for t in self.topics],
        }


@dataclass(frozen=True)
class RoadmapProgress:
    completed: int
    total: int

    @property
    def percent(self) -> float:
        return percentage(self.completed, self.total)


def _parse_topics(raw: Iterable[dict]) -> list[DailyTopic]:
    topics = []
    for i, item in enumerate(raw or [], start=1):
        day = parse_enum(Weekday, item.get("day"), None)
        if day is None:
            raise ValidationError(f"Topic {i}: day must be Monday to Friday")
        kind = parse_enum(TopicType, item.get("type") or TopicType.IN_PERSON.value, None)
        if kind is None:
            raise ValidationError(f"Topic {i}: type must be in-person or online")
        topics.append(
            DailyTopic(
                day=day,
                topic=require_non_empty(item.get("topic"), f"Topic {i}"),
                type=kind,
                duration=(item.get("duration") or "").strip() or None,
            )
        )
    return topics


class RoadmapService:
    def __init__(self, roadmaps: RoadmapRepository):
        self._roadmaps = roadmaps

    @staticmethod
    def build_week_plan(
        *,
        program_id: str,
        week_number,
        title: str,
        start_date,
        objectives: Optional[Iterable[str]] = None,
        topics: Optional[Iterable[dict]] = None,
    ) -> WeekPlan:
        try:
            number = int(week_number)
        except (TypeError, ValueError):
            raise ValidationError("Week number must be a whole number")
        if number < 1:
            raise ValidationError("Week number must be 1 or more")

        if isinstance(start_date, date):
            start = start_date
        else:
            try:
                start = parse_iso_date(require_non_empty(start_date, "Start date")[:10])
            except ValueError:
                raise ValidationError("Start date must be a date (YYYY-MM-DD)")

        return WeekPlan(
            program_id=require_id(program_id, "Program"),
            week_number=number,
            title=require_non_empty(title, "Week title"),
            start_date=start,
            objectives=[o.strip() for o in (objectives or []) if o and o.strip()],
            topics=_parse_topics(topics or []),
        )

    def create_week(self, *, current_role: Role, **form) -> RoadmapWeek:
        if current_role not in PLANNERS:
            raise AuthorizationError("You are not allowed to plan roadmaps")
        plan = self.build_week_plan(**form)
        week = self._roadmaps.create_week(plan.to_api())
        logger.info("Roadmap week %s created for program %s", plan.week_number, plan.program_id)
        return week

    def program_roadmap(self, program_id: str) -> list[RoadmapWeek]:
        weeks = self._roadmaps.program_roadmap(require_id(program_id, "Program"))
        return sorted(weeks, key=lambda w: w.week_number)

    def get_week(self, week_id: str) -> RoadmapWeek:
        return self._roadmaps.get_week(require_id(week_id, "Week"))

    def update_week(self, *, current_role: Role, week_id: str, **changes) -> RoadmapWeek:
        if current_role not in PLANNERS:
            raise AuthorizationError("You are not allowed to edit roadmaps")

        payload: dict = {}
        if changes.get("title") is not None:
            payload["title"] = require_non_empty(changes["title"], "Week title")
        if changes.get("objectives") is not None:
            payload["objectives"] = [o.strip() for o in changes["objectives"] if o and o.strip()]
        if changes.get("topics") is not None:
            payload["topics"] = [t.to_api() for t in _parse_topics(changes["topics"])]
        if changes.get("start_date"):
            try:
                payload["startDate"] = parse_iso_date(str(changes["start_date"])[:10]).isoformat()
            except ValueError:
                raise ValidationError("Start date must be a date (YYYY-MM-DD)")
        if not payload:
            raise ValidationError("Nothing to update")

        return self._roadmaps.update_week(require_id(week_id, "Week"), payload)

    def delete_week(self, *, current_role: Role, week_id: str) -> None:
        if current_role not in PLANNERS:
            raise AuthorizationError("You are not allowed to delete roadmap weeks")
        self._roadmaps.delete_week(require_id(week_id, "Week"))

    def set_topic_completed(self, *, week: RoadmapWeek, topic_index: int, completed: bool) -> RoadmapWeek:
        if not 0 <= topic_index < len(week.topics):
            raise ValidationError("Topic not found in this week")
        return self._roadmaps.set_topic_status(week.week_id, topic_index=topic_index, completed=completed)

    def submit_week(self, *, current_role: Role, week_id: str) -> RoadmapWeek:
        if current_role not in PLANNERS:
            raise AuthorizationError("You are not allowed to submit roadmaps")
        return self._roadmaps.submit(require_id(week_id, "Week"))

    def review_week(self, *, current_role: Role, week_id: str, action: str, feedback: Optional[str] = None) -> RoadmapWeek:
        """Approve or reject a submitted week. Rejection needs feedback."""

        if current_role not in REVIEWERS:
            raise AuthorizationError("Only managers can review roadmaps")
        action = (action or "").strip().lower()
        if action not in (APPROVE, REJECT):
            raise ValidationError("Action must be approve or reject")
        feedback = (feedback or "").strip()
        if action == REJECT and not feedback:
            raise ValidationError("Feedback is required when rejecting a roadmap")

        week = self._roadmaps.review(require_id(week_id, "Week"), action=action, feedback=feedback)
        logger.info("Roadmap week %s reviewed: %s", week.week_id, action)
        return week

    @staticmethod
    def pending(weeks: Sequence[RoadmapWeek]) -> list[RoadmapWeek]:
        return [w for w in weeks if w.status == ApprovalStatus.PENDING_APPROVAL]

    @staticmethod
    def week_progress(week: RoadmapWeek) -> RoadmapProgress:
        return RoadmapProgress(completed=week.completed_topics, total=len(week.topics))

    @staticmethod
    def overall_progress(weeks: Sequence[RoadmapWeek]) -> RoadmapProgress:
        return RoadmapProgress(
            completed=sum(w.completed_topics for w in weeks),
            total=sum(len(w.topics) for w in weeks),
        )

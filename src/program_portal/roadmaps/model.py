from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from ..api.rest_base import parse_date, ref_id
from ..core.enums import ApprovalStatus, parse_enum


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"


class TopicType(str, Enum):
    IN_PERSON = "in-person"
    ONLINE = "online"


@dataclass(frozen=True)
class DailyTopic:
    day: Weekday
    topic: str
    type: TopicType = TopicType.IN_PERSON
    duration: Optional[str] = None
    completed: bool = False

    @classmethod
    def from_api(cls, data: dict) -> "DailyTopic":
        return cls(
            day=parse_enum(Weekday, data.get("day"), Weekday.MONDAY),
            topic=data.get("topic") or "",
            type=parse_enum(TopicType, data.get("type"), TopicType.IN_PERSON),
            duration=data.get("duration"),
            completed=bool(data.get("completed", False)),
        )

    def to_api(self) -> dict:
        payload = {"day": self.day.value, "topic": self.topic, "type": self.type.value}
        if self.duration:
            payload["duration"] = self.duration
        return payload


@dataclass(frozen=True)
class RoadmapWeek:
    """One week of a program's curriculum plan."""

    week_id: str
    program_id: Optional[str]
    week_number: int
    title: str
    start_date: Optional[date]
    objectives: list[str] = field(default_factory=list)
    topics: list[DailyTopic] = field(default_factory=list)
    status: ApprovalStatus = ApprovalStatus.DRAFT
    feedback: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "RoadmapWeek":
        return cls(
            week_id=str(data.get("_id") or ""),
            program_id=ref_id(data.get("program")),
            week_number=int(data.get("weekNumber") or 0),
            title=data.get("title") or "",
            start_date=parse_date(data.get("startDate")),
            objectives=[o for o in (data.get("objectives") or []) if o],
            topics=[DailyTopic.from_api(t) for t in (data.get("topics") or [])],
            status=parse_enum(ApprovalStatus, data.get("status"), ApprovalStatus.DRAFT),
            feedback=data.get("feedback"),
        )

    @property
    def completed_topics(self) -> int:
        return sum(1 for t in self.topics if t.completed)

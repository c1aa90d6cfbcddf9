"""Objects exchanged with API clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TimelineInput:
    """The input for generating a timeline."""

    current_level: str
    goal: str
    objectives: str
    current_date: str
    target_date: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "currentLevel": self.current_level,
            "goal": self.goal,
            "objectives": self.objectives,
            "currentDate": self.current_date,
        }
        if self.target_date is not None:
            result["targetDate"] = self.target_date
        return result


@dataclass
class TimelineTask:
    """A single task in a timeline, with dates as YYYY-MM-DD strings."""

    title: str
    description: str
    start_date: str
    end_date: str
    duration: str
    priority: int
    id: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "duration": self.duration,
            "priority": self.priority,
        }


@dataclass
class Timeline:
    """A generated timeline for achieving a goal."""

    title: str
    description: str
    start_date: str
    end_date: str
    tasks: list[TimelineTask] = field(default_factory=list)
    id: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "tasks": [task.to_dict() for task in self.tasks],
        }
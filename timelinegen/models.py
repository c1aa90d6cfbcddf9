"""Records stored by the timeline service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class User:
    """A registered user."""

    id: str
    email: str
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass
class Goal:
    """A goal a user wants to reach."""

    id: str
    user_id: str
    title: str
    description: str
    current_level: str
    target_level: str
    start_date: datetime
    target_date: datetime
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "current_level": self.current_level,
            "target_level": self.target_level,
            "start_date": self.start_date.isoformat(),
            "target_date": self.target_date.isoformat(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass
class TimelineTask:
    """A single task within a timeline."""

    id: str
    timeline_id: str
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    duration: str
    priority: int
    completed: bool
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timeline_id": self.timeline_id,
            "title": self.title,
            "description": self.description,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "duration": self.duration,
            "priority": self.priority,
            "completed": self.completed,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass
class Timeline:
    """A timeline for a goal, optionally with its tasks."""

    id: str
    goal_id: str
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    created_at: datetime
    updated_at: datetime
    tasks: list[TimelineTask] = field(default_factory=list)

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "goal_id": self.goal_id,
            "title": self.title,
            "description": self.description,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
        if self.tasks:
            result["tasks"] = [task.to_dict() for task in self.tasks]
        return result


@dataclass
class TimelineInput:
    """What a user supplies to have a timeline generated."""

    current_level: str
    goal: str
    objectives: str
    current_date: str
    target_date: str = ""

    def to_dict(self) -> dict:
        result = {
            "current_level": self.current_level,
            "goal": self.goal,
            "objectives": self.objectives,
            "current_date": self.current_date,
        }
        if self.target_date:
            result["target_date"] = self.target_date
        return result
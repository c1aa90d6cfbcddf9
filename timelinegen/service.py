"""Generating, storing and returning a timeline for a user's goal."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

from .database import Database
from .goal_repository import GoalRepository
from .models import Timeline, TimelineInput
from .task_repository import TaskRepository
from .timeline_repository import TimelineRepository

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

_PROMPT = """
You are a professional career and learning coach AI. Create a detailed learning timeline with specific tasks to help someone achieve their goal.

CURRENT LEVEL: {current_level}
GOAL: {goal}
OBJECTIVES: {objectives}
CURRENT DATE: {current_date}
TARGET DATE: {target_date}

Your response should be formatted as a JSON object with the following structure:
{{
  "title": "Title of the learning plan",
  "description": "Overview description of the learning plan",
  "tasks": [
    {{
      "title": "Task title",
      "description": "Detailed description of what to do",
      "start_date": "YYYY-MM-DD",
      "end_date": "YYYY-MM-DD",
      "duration": "X days/weeks",
      "priority": 1-5 (higher number means higher priority)
    }},
    ...more tasks
  ]
}}

Make sure dates are in YYYY-MM-DD format and are realistic based on task complexity. Break down complex goals into manageable steps. Include specific resources and measurable outcomes.
"""


class TimelineGenerationError(RuntimeError):
    """A timeline could not be generated or stored."""


class CompletionClient(Protocol):
    def generate_completion(self, prompt: str) -> str: ...


@dataclass
class _GeneratedTask:
    title: str = ""
    description: str = ""
    start_date: str = ""
    end_date: str = ""
    duration: str = ""
    priority: int = 0


@dataclass
class _GeneratedTimeline:
    title: str = ""
    description: str = ""
    tasks: list[_GeneratedTask] = field(default_factory=list)


def _as_object(value: Any, what: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be an object")
    return value


def _as_string(obj: dict, key: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _as_integer(obj: dict, key: str) -> int:
    value = obj.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r} must be an integer")
    return value


def _parse_generated(content: str) -> _GeneratedTimeline:
    data = _as_object(json.loads(content), "timeline")
    raw_tasks = data.get("tasks")
    if raw_tasks is None:
        raw_tasks = []
    if not isinstance(raw_tasks, list):
        raise ValueError("field 'tasks' must be a list")
    tasks = []
    for item in raw_tasks:
        task = _as_object(item, "task")
        tasks.append(
            _GeneratedTask(
                title=_as_string(task, "title"),
                description=_as_string(task, "description"),
                start_date=_as_string(task, "start_date"),
                end_date=_as_string(task, "end_date"),
                duration=_as_string(task, "duration"),
                priority=_as_integer(task, "priority"),
            )
        )
    return _GeneratedTimeline(
        title=_as_string(data, "title"),
        description=_as_string(data, "description"),
        tasks=tasks,
    )


def _parse_date(value: str) -> datetime:
    if not _DATE_PATTERN.fullmatch(value):
        raise ValueError(f"cannot parse {value!r} as YYYY-MM-DD")
    return datetime.strptime(value, "%Y-%m-%d")


def _date_or_raise(value: str, what: str) -> datetime:
    try:
        return _parse_date(value)
    except ValueError as exc:
        raise TimelineGenerationError(f"{what}: {exc}") from exc


class TimelineGenerator:
    """Asks the model for a plan and stores it as a goal, timeline and tasks."""

    def __init__(self, openai_client: CompletionClient, db: Database) -> None:
        self.openai_client = openai_client
        self.goal_repo = GoalRepository(db)
        self.timeline_repo = TimelineRepository(db)
        self.task_repo = TaskRepository(db)

    def generate_timeline(self, user_id: str, input: TimelineInput) -> Timeline:
        """Generate a timeline for the user, store it and return it with its tasks."""
        prompt = self.create_prompt(input)
        try:
            response = self.openai_client.generate_completion(prompt)
        except Exception as exc:
            raise TimelineGenerationError(f"failed to generate timeline: {exc}") from exc

        try:
            data = _parse_generated(response)
        except ValueError as exc:
            raise TimelineGenerationError(f"failed to parse timeline data: {exc}") from exc

        start_date = _date_or_raise(input.current_date, "invalid current date")
        if input.target_date:
            end_date = _date_or_raise(input.target_date, "invalid target date")
        else:
            if not data.tasks:
                raise TimelineGenerationError(
                    "invalid task end date: the generated timeline has no tasks"
                )
            end_date = _date_or_raise(data.tasks[-1].end_date, "invalid task end date")

        try:
            goal = self.goal_repo.create(
                user_id, input.goal, "", input.current_level, input.goal, start_date, end_date
            )
        except Exception as exc:
            raise TimelineGenerationError(f"failed to create goal: {exc}") from exc

        try:
            timeline = self.timeline_repo.create(
                goal.id, data.title, data.description, start_date, end_date
            )
        except Exception as exc:
            raise TimelineGenerationError(f"failed to create timeline: {exc}") from exc

        for task in data.tasks:
            task_start = _date_or_raise(task.start_date, "invalid task start date")
            task_end = _date_or_raise(task.end_date, "invalid task end date")
            try:
                self.task_repo.create(
                    timeline.id,
                    task.title,
                    task.description,
                    task.duration,
                    task_start,
                    task_end,
                    task.priority,
                )
            except Exception as exc:
                raise TimelineGenerationError(f"failed to create task: {exc}") from exc

        return self.timeline_repo.get_by_id(timeline.id)

    def create_prompt(self, input: TimelineInput) -> str:
        """Return the prompt that asks the model for a learning timeline."""
        return _PROMPT.format(
            current_level=input.current_level,
            goal=input.goal,
            objectives=input.objectives,
            current_date=input.current_date,
            target_date=input.target_date,
        )
"""Storage of timelines."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Sequence

from .database import Database
from .models import Timeline
from .task_repository import TaskRepository

_COLUMNS = (
    "id, goal_id, title, description, start_date, end_date, created_at, updated_at"
)


def _timeline_from_row(row: Sequence) -> Timeline:
    (
        timeline_id,
        goal_id,
        title,
        description,
        start_date,
        end_date,
        created_at,
        updated_at,
    ) = row
    return Timeline(
        id=timeline_id,
        goal_id=goal_id,
        title=title,
        description=description,
        start_date=start_date,
        end_date=end_date,
        created_at=created_at,
        updated_at=updated_at,
    )


class TimelineRepository:
    """Database operations for timelines."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def create(
        self,
        goal_id: str,
        title: str,
        description: str,
        start_date: datetime,
        end_date: datetime,
    ) -> Timeline:
        now = datetime.now()
        timeline = Timeline(
            id=str(uuid.uuid4()),
            goal_id=goal_id,
            title=title,
            description=description,
            start_date=start_date,
            end_date=end_date,
            created_at=now,
            updated_at=now,
        )
        self._db.execute(
            f"INSERT INTO timelines ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                timeline.id,
                timeline.goal_id,
                timeline.title,
                timeline.description,
                timeline.start_date,
                timeline.end_date,
                timeline.created_at,
                timeline.updated_at,
            ),
        )
        return timeline

    def get_by_id(self, id: str) -> Timeline:
        """Return the timeline with its tasks, or raise RecordNotFound."""
        row = self._db.fetch_one(f"SELECT {_COLUMNS} FROM timelines WHERE id = ?", (id,))
        timeline = _timeline_from_row(row)
        timeline.tasks = TaskRepository(self._db).get_by_timeline_id(timeline.id)
        return timeline

    def get_by_goal_id(self, goal_id: str) -> list[Timeline]:
        """Return every timeline for a goal, without their tasks."""
        rows = self._db.fetch_all(
            f"SELECT {_COLUMNS} FROM timelines WHERE goal_id = ?", (goal_id,)
        )
        return [_timeline_from_row(row) for row in rows]
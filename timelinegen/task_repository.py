"""Storage of timeline tasks."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Sequence

from .database import Database
from .models import TimelineTask

_COLUMNS = (
    "id, timeline_id, title, description, start_date, end_date, "
    "duration, priority, completed, created_at, updated_at"
)


def _task_from_row(row: Sequence) -> TimelineTask:
    (
        task_id,
        timeline_id,
        title,
        description,
        start_date,
        end_date,
        duration,
        priority,
        completed,
        created_at,
        updated_at,
    ) = row
    return TimelineTask(
        id=task_id,
        timeline_id=timeline_id,
        title=title,
        description=description,
        start_date=start_date,
        end_date=end_date,
        duration=duration,
        priority=int(priority),
        completed=bool(completed),
        created_at=created_at,
        updated_at=updated_at,
    )


class TaskRepository:
    """Database operations for timeline tasks."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def create(
        self,
        timeline_id: str,
        title: str,
        description: str,
        duration: str,
        start_date: datetime,
        end_date: datetime,
        priority: int,
    ) -> TimelineTask:
        now = datetime.now()
        task = TimelineTask(
            id=str(uuid.uuid4()),
            timeline_id=timeline_id,
            title=title,
            description=description,
            start_date=start_date,
            end_date=end_date,
            duration=duration,
            priority=priority,
            completed=False,
            created_at=now,
            updated_at=now,
        )
        self._db.execute(
            f"INSERT INTO timeline_tasks ({_COLUMNS}) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                task.id,
                task.timeline_id,
                task.title,
                task.description,
                task.start_date,
                task.end_date,
                task.duration,
                task.priority,
                task.completed,
                task.created_at,
                task.updated_at,
            ),
        )
        return task

    def get_by_id(self, id: str) -> TimelineTask:
        """Return the task with this id, or raise RecordNotFound."""
        row = self._db.fetch_one(
            f"SELECT {_COLUMNS} FROM timeline_tasks WHERE id = ?", (id,)
        )
        return _task_from_row(row)

    def get_by_timeline_id(self, timeline_id: str) -> list[TimelineTask]:
        """Return a timeline's tasks, earliest first, higher priority first on ties."""
        rows = self._db.fetch_all(
            f"SELECT {_COLUMNS} FROM timeline_tasks WHERE timeline_id = ? "
            "ORDER BY start_date ASC, priority DESC",
            (timeline_id,),
        )
        return [_task_from_row(row) for row in rows]

    def update_completion_status(self, id: str, completed: bool) -> None:
        """Mark a task as completed or not, touching its update time."""
        self._db.execute(
            "UPDATE timeline_tasks SET completed = ?, updated_at = ? WHERE id = ?",
            (completed, datetime.now(), id),
        )
"""Storage of goals."""

from __future__ import annotations

import uuid
from datetime import datetime

from .database import Database
from .models import Goal

_COLUMNS = (
    "id, user_id, title, description, current_level, target_level, "
    "start_date, target_date, created_at, updated_at"
)


class GoalRepository:
    """Database operations for goals."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def create(
        self,
        user_id: str,
        title: str,
        description: str,
        current_level: str,
        target_level: str,
        start_date: datetime,
        target_date: datetime,
    ) -> Goal:
        now = datetime.now()
        goal = Goal(
            id=str(uuid.uuid4()),
            user_id=user_id,
            title=title,
            description=description,
            current_level=current_level,
            target_level=target_level,
            start_date=start_date,
            target_date=target_date,
            created_at=now,
            updated_at=now,
        )
        self._db.execute(
            f"INSERT INTO goals ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                goal.id,
                goal.user_id,
                goal.title,
                goal.description,
                goal.current_level,
                goal.target_level,
                goal.start_date,
                goal.target_date,
                goal.created_at,
                goal.updated_at,
            ),
        )
        return goal

    def get_by_id(self, id: str) -> Goal:
        """Return the goal with this id, or raise RecordNotFound."""
        return Goal(*self._db.fetch_one(f"SELECT {_COLUMNS} FROM goals WHERE id = ?", (id,)))

    def get_by_user_id(self, user_id: str) -> list[Goal]:
        """Return every goal belonging to a user."""
        rows = self._db.fetch_all(f"SELECT {_COLUMNS} FROM goals WHERE user_id = ?", (user_id,))
        return [Goal(*row) for row in rows]
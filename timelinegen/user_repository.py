"""Storage of users."""

from __future__ import annotations

import uuid
from datetime import datetime

from .database import Database
from .models import User

_COLUMNS = "id, email, created_at, updated_at"


class UserRepository:
    """Database operations for users."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def create(self, email: str) -> User:
        now = datetime.now()
        user = User(id=str(uuid.uuid4()), email=email, created_at=now, updated_at=now)
        self._db.execute(
            "INSERT INTO users (id, email, created_at, updated_at) VALUES (?, ?, ?, ?)",
            (user.id, user.email, user.created_at, user.updated_at),
        )
        return user

    def get_by_id(self, id: str) -> User:
        """Return the user with this id, or raise RecordNotFound."""
        return User(*self._db.fetch_one(f"SELECT {_COLUMNS} FROM users WHERE id = ?", (id,)))

    def get_by_email(self, email: str) -> User:
        """Return the user with this e-mail address, or raise RecordNotFound."""
        return User(
            *self._db.fetch_one(f"SELECT {_COLUMNS} FROM users WHERE email = ?", (email,))
        )
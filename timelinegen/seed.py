"""Reset the database and fill it with sample data."""

from __future__ import annotations

import argparse
import calendar
import logging
import sys
from datetime import datetime, timedelta
from typing import Optional, Sequence

from .database import Database, connect
from .goal_repository import GoalRepository
from .task_repository import TaskRepository
from .timeline_repository import TimelineRepository

logger = logging.getLogger(__name__)

SEED_USER_ID = "1"
SEED_USER_EMAIL = "test@example.com"

# Dependants first.
_TABLES = ("timeline_tasks", "timelines", "goals", "users")


def _add_months(moment: datetime, months: int) -> datetime:
    """Add months, letting an overflowing day roll into the following month."""
    index = moment.month - 1 + months
    year, month = moment.year + index // 12, index % 12 + 1
    first = moment.replace(year=year, month=month, day=1)
    days_in_month = calendar.monthrange(year, month)[1]
    if moment.day <= days_in_month:
        return first.replace(day=moment.day)
    return first + timedelta(days=moment.day - 1)


def delete_all(db: Database) -> None:
    """Remove every row from the service's tables."""
    for table in _TABLES:
        db.execute(f"DELETE FROM {table}")


def create_all(db: Database) -> None:
    """Insert a sample user with one goal, one timeline and two tasks."""
    logger.info("Generated userID: %s", SEED_USER_ID)
    now = datetime.now()
    try:
        db.execute(
            "INSERT INTO users (id, email, created_at, updated_at) VALUES (?, ?, ?, ?)",
            (SEED_USER_ID, SEED_USER_EMAIL, now, now),
        )
    except Exception as exc:
        raise RuntimeError(f"failed to insert user: {exc}") from exc

    try:
        goal = GoalRepository(db).create(
            SEED_USER_ID,
            "Master Go Programming",
            "Become proficient in Go",
            "Beginner",
            "Advanced",
            now,
            _add_months(now, 3),
        )
    except Exception as exc:
        raise RuntimeError(f"failed to insert goal: {exc}") from exc

    start = datetime.now()
    try:
        timeline = TimelineRepository(db).create(
            goal.id,
            "Learning Go Programming",
            "A complete pathway to master Go programming language",
            start,
            _add_months(start, 3),
        )
    except Exception as exc:
        raise RuntimeError(f"failed to insert timeline: {exc}") from exc

    tasks = [
        (
            "Setup Go Environment",
            "Install Go and set up the development environment",
            "7 days",
            start,
            start + timedelta(days=7),
        ),
        (
            "Learn Go Basics",
            "Learn basic syntax, variables, and control structures",
            "14 days",
            start + timedelta(days=8),
            start + timedelta(days=21),
        ),
    ]
    task_repo = TaskRepository(db)
    for title, description, duration, task_start, task_end in tasks:
        try:
            task_repo.create(timeline.id, title, description, duration, task_start, task_end, 1)
        except Exception as exc:
            raise RuntimeError(f"failed to insert task: {exc}") from exc


def run(db: Database) -> None:
    """Replace all data with the sample data in a single transaction."""
    with db.transaction():
        try:
            delete_all(db)
        except Exception as exc:
            raise RuntimeError(f"failed to delete existing data: {exc}") from exc
        try:
            create_all(db)
        except Exception as exc:
            raise RuntimeError(f"failed to create seed data: {exc}") from exc


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Seed the database configured by the MYSQL_* variables; return the exit code."""
    argparse.ArgumentParser(description="Reset the database with sample data.").parse_args(
        argv
    )
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting seed process")
    try:
        db = connect()
    except ConnectionError as exc:
        logger.error("%s", exc)
        return 1
    try:
        run(db)
    except Exception as exc:
        logger.error("%s", exc)
        return 1
    finally:
        db.close()
    logger.info("Seed completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
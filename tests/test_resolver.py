import json
import sqlite3
from datetime import datetime

import httpx
import pytest

from timelinegen.database import Database, RecordNotFound
from timelinegen.goal_repository import GoalRepository
from timelinegen.graph_models import TimelineInput
from timelinegen.models import Timeline, TimelineTask
from timelinegen.openai_client import OpenAIClient
from timelinegen.resolver import Resolver, convert_timeline_to_graphql
from timelinegen.task_repository import TaskRepository
from timelinegen.timeline_repository import TimelineRepository

sqlite3.register_adapter(datetime, lambda value: value.isoformat(" "))
sqlite3.register_converter("TIMESTAMP", lambda raw: datetime.fromisoformat(raw.decode()))

SCHEMA = """
CREATE TABLE goals (
    id TEXT PRIMARY KEY,
    user_id TEXT,
    title TEXT,
    description TEXT,
    current_level TEXT,
    target_level TEXT,
    start_date TIMESTAMP,
    target_date TIMESTAMP,
    created_at TIMESTAMP,
    updated_at TIMESTAMP
);
CREATE TABLE timelines (
    id TEXT PRIMARY KEY,
    goal_id TEXT,
    title TEXT,
    description TEXT,
    start_date TIMESTAMP,
    end_date TIMESTAMP,
    created_at TIMESTAMP,
    updated_at TIMESTAMP
);
CREATE TABLE timeline_tasks (
    id TEXT PRIMARY KEY,
    timeline_id TEXT,
    title TEXT,
    description TEXT,
    start_date TIMESTAMP,
    end_date TIMESTAMP,
    duration TEXT,
    priority INTEGER,
    completed INTEGER,
    created_at TIMESTAMP,
    updated_at TIMESTAMP
);
"""

GENERATED = {
    "title": "Learning Go Programming",
    "description": "A complete pathway",
    "startDate": "2024-01-01",
    "endDate": "2024-04-01",
    "tasks": [
        {
            "title": "Setup Go Environment",
            "description": "Install Go",
            "startDate": "2024-01-01",
            "endDate": "2024-01-08",
            "duration": "7 days",
            "priority": 5,
        }
    ],
}


@pytest.fixture
def db():
    connection = sqlite3.connect(":memory:", detect_types=sqlite3.PARSE_DECLTYPES)
    connection.executescript(SCHEMA)
    database = Database(connection)
    yield database
    database.close()


@pytest.fixture
def openai_client():
    def handler(request):
        return httpx.Response(
            200,
            json={"choices": [{"message": {"content": "Sure:\n" + json.dumps(GENERATED)}}]},
        )

    client = OpenAIClient(
        api_key="placeholder",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    yield client
    client.close()


@pytest.fixture
def resolver(openai_client, db):
    return Resolver(openai_client, db)


def _make_goal(db, user_id):
    return GoalRepository(db).create(
        user_id, "Master Go", "", "Beginner", "Advanced", datetime(2024, 1, 1), datetime(2024, 4, 1)
    )


def test_convert_formats_dates_and_keeps_task_fields():
    stamp = datetime(2024, 5, 6, 7, 8, 9)
    task = TimelineTask(
        id="task-1", timeline_id="tl-1", title="Setup", description="Install",
        start_date=datetime(2024, 1, 1, 12, 30), end_date=datetime(2024, 1, 8),
        duration="7 days", priority=2, completed=True, created_at=stamp, updated_at=stamp,
    )
    timeline = Timeline(
        id="tl-1", goal_id="g", title="Plan", description="Desc",
        start_date=datetime(2024, 1, 1, 23, 59), end_date=datetime(2024, 4, 1),
        created_at=stamp, updated_at=stamp, tasks=[task],
    )
    result = convert_timeline_to_graphql(timeline)
    assert result.id == "tl-1"
    assert result.start_date == "2024-01-01"
    assert result.end_date == "2024-04-01"
    assert len(result.tasks) == 1
    converted = result.tasks[0]
    assert (converted.id, converted.title, converted.duration, converted.priority) == (
        "task-1", "Setup", "7 days", 2,
    )
    assert converted.start_date == "2024-01-01"
    assert converted.end_date == "2024-01-08"


def test_timeline_query_returns_tasks(db, resolver):
    goal = _make_goal(db, "1")
    stored = TimelineRepository(db).create(goal.id, "Plan", "Desc", datetime(2024, 1, 1), datetime(2024, 4, 1))
    task = TaskRepository(db).create(
        stored.id, "Setup", "Install", "7 days", datetime(2024, 1, 1), datetime(2024, 1, 8), 1
    )
    result = resolver.timeline(stored.id)
    assert result.id == stored.id
    assert result.title == "Plan"
    assert [t.id for t in result.tasks] == [task.id]


def test_timeline_query_missing_raises(resolver):
    with pytest.raises(RecordNotFound):
        resolver.timeline("missing")


def test_timelines_query_by_goal(db, resolver):
    repo = TimelineRepository(db)
    first = repo.create("goal-a", "One", "", datetime(2024, 1, 1), datetime(2024, 2, 1))
    repo.create("goal-b", "Other", "", datetime(2024, 1, 1), datetime(2024, 2, 1))
    result = resolver.timelines("goal-a")
    assert [timeline.id for timeline in result] == [first.id]
    assert result[0].tasks == []


def test_user_timelines_collects_all_goals(db, resolver):
    repo = TimelineRepository(db)
    goal_one = _make_goal(db, "1")
    goal_two = _make_goal(db, "1")
    other_goal = _make_goal(db, "2")
    expected = {
        repo.create(goal_one.id, "A", "", datetime(2024, 1, 1), datetime(2024, 2, 1)).id,
        repo.create(goal_two.id, "B", "", datetime(2024, 1, 1), datetime(2024, 2, 1)).id,
        repo.create(goal_two.id, "C", "", datetime(2024, 1, 1), datetime(2024, 2, 1)).id,
    }
    repo.create(other_goal.id, "D", "", datetime(2024, 1, 1), datetime(2024, 2, 1))
    result = resolver.user_timelines("1")
    assert {timeline.id for timeline in result} == expected
    assert len(result) == 3


def test_user_timelines_unknown_user_is_empty(resolver):
    assert resolver.user_timelines("nobody") == []


def test_generate_timeline_uses_client(resolver):
    result = resolver.generate_timeline(
        TimelineInput(current_level="Beginner", goal="Learn Go", objectives="Build a CLI", current_date="2024-01-01")
    )
    assert result.title == GENERATED["title"]
    assert result.end_date == GENERATED["endDate"]
    assert [task.title for task in result.tasks] == ["Setup Go Environment"]
    assert result.tasks[0].priority == 5
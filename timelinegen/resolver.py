"""Query and mutation resolvers for the timeline API."""

from __future__ import annotations

from .database import Database
from .goal_repository import GoalRepository
from .graph_models import Timeline as GraphTimeline
from .graph_models import TimelineInput
from .graph_models import TimelineTask as GraphTimelineTask
from .models import Timeline
from .openai_client import OpenAIClient
from .timeline_repository import TimelineRepository

_DATE_FORMAT = "%Y-%m-%d"


def convert_timeline_to_graphql(timeline: Timeline) -> GraphTimeline:
    """Turn a stored timeline into the API shape, with dates as YYYY-MM-DD."""
    tasks = [
        GraphTimelineTask(
            id=task.id,
            title=task.title,
            description=task.description,
            start_date=task.start_date.strftime(_DATE_FORMAT),
            end_date=task.end_date.strftime(_DATE_FORMAT),
            duration=task.duration,
            priority=task.priority,
        )
        for task in timeline.tasks
    ]
    return GraphTimeline(
        id=timeline.id,
        title=timeline.title,
        description=timeline.description,
        start_date=timeline.start_date.strftime(_DATE_FORMAT),
        end_date=timeline.end_date.strftime(_DATE_FORMAT),
        tasks=tasks,
    )


class Resolver:
    """Resolves the API's fields against the model client and the database."""

    def __init__(self, openai_client: OpenAIClient, db: Database) -> None:
        self.openai_client = openai_client
        self.db = db

    def generate_timeline(self, input: TimelineInput) -> GraphTimeline:
        """Resolve the generateTimeline mutation."""
        return self.openai_client.generate_timeline(input)

    def timeline(self, id: str) -> GraphTimeline:
        """Resolve the timeline query; raises RecordNotFound for unknown ids."""
        return convert_timeline_to_graphql(TimelineRepository(self.db).get_by_id(id))

    def timelines(self, goal_id: str) -> list[GraphTimeline]:
        """Resolve the timelines query for one goal."""
        return [
            convert_timeline_to_graphql(timeline)
            for timeline in TimelineRepository(self.db).get_by_goal_id(goal_id)
        ]

    def user_timelines(self, user_id: str) -> list[GraphTimeline]:
        """Resolve the userTimelines query across all of a user's goals."""
        timeline_repo = TimelineRepository(self.db)
        return [
            convert_timeline_to_graphql(timeline)
            for goal in GoalRepository(self.db).get_by_user_id(user_id)
            for timeline in timeline_repo.get_by_goal_id(goal.id)
        ]
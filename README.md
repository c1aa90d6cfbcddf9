# timelinegen

Turn a goal into a dated plan. `timelinegen` asks an AI chat model for a
timeline of concrete tasks (title, description, start and end dates,
duration and priority), parses the answer, and keeps users, goals,
timelines and tasks in a MySQL database.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Configuration

`timelinegen.database.connect()` reads the database connection from the
environment, or from a mapping passed as `environ`:

| Variable         | Meaning                              |
|------------------|--------------------------------------|
| `MYSQL_USER`     | database user                        |
| `MYSQL_PASSWORD` | database password                    |
| `MYSQL_HOST`     | database host                        |
| `MYSQL_PORT`     | database port (3306 when unset)      |
| `MYSQL_DATABASE` | database (schema) name               |

A failed connection or ping raises `ConnectionError`.

The database must already hold the tables `users`, `goals`, `timelines`
and `timeline_tasks`; the package does not create them.

The API key for the chat model is given to `OpenAIClient` directly; the
package reads no key from the environment.

## Seeding sample data

```
timelinegen-seed
```

(or `python -m timelinegen.seed`). This empties `timeline_tasks`,
`timelines`, `goals` and `users` (in that order), then inserts one user
(`test@example.com`, id `1`), one goal, one timeline and two tasks, all
inside a single transaction. If anything fails the transaction is rolled
back, the error is logged and the command exits with status 1.

## Library overview

- `timelinegen.models` – stored records: `User`, `Goal`, `Timeline`,
  `TimelineTask`, `TimelineInput`, each with `to_dict()`.
- `timelinegen.graph_models` – the API-facing `Timeline`, `TimelineTask`
  and `TimelineInput`, with dates as `YYYY-MM-DD` strings and camelCase
  keys from `to_dict()`.
- `timelinegen.database` – `MySQLSettings` (`from_env()`, `dsn()`),
  `Database` (`execute`, `fetch_one`, `fetch_all`, `transaction`, `close`)
  and `connect()`. `Database` wraps any DB-API connection; outside a
  `transaction()` block every statement is committed as it runs. Lookups
  that find nothing raise `RecordNotFound`.
- `timelinegen.openai_client` – `OpenAIClient` (`generate_completion`,
  `generate_timeline`), `build_timeline_prompt()`, `extract_json()` and
  `parse_timeline()`. API failures raise `OpenAIError`; unusable answers
  raise `TimelineParseError`.
- `timelinegen.user_repository`, `goal_repository`, `task_repository`,
  `timeline_repository` – create and look up records. Tasks of a timeline
  come back ordered by start date, then by priority, highest first;
  `TimelineRepository.get_by_id` includes the tasks, `get_by_goal_id` does
  not. `TaskRepository.update_completion_status` marks a task done or not.
- `timelinegen.resolver` – `Resolver` with `generate_timeline`,
  `timeline`, `timelines` and `user_timelines`, plus
  `convert_timeline_to_graphql()`.
- `timelinegen.service` – `TimelineGenerator`, which asks the model for a
  plan, stores the goal, timeline and tasks it describes and returns the
  stored timeline. Failures raise `TimelineGenerationError`.

Example:

```python
import sqlite3

from timelinegen.database import Database
from timelinegen.openai_client import OpenAIClient, extract_json
from timelinegen.resolver import Resolver

extract_json('Here you go: {"title": "Plan"} Good luck!')
# '{"title": "Plan"}'

db = Database(sqlite3.connect("timelines.db"))  # '?' placeholders by default
resolver = Resolver(OpenAIClient(api_key="placeholder"), db)
for timeline in resolver.user_timelines("1"):
    print(timeline.title, timeline.start_date, timeline.end_date)
```

## What it does not do

There is no HTTP or GraphQL server in this package. `Resolver` holds the
logic behind the `generateTimeline`, `timeline`, `timelines` and
`userTimelines` operations, but serving them over the network is left to
the application that uses it. Nor does the package create or migrate the
database schema.
"""Timeline generation through the OpenAI chat completions API."""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx

from .graph_models import Timeline, TimelineInput, TimelineTask

DEFAULT_BASE_URL = "https://api.openai.com/v1"
GPT_3_5_TURBO = "gpt-3.5-turbo"
SYSTEM_PROMPT = (
    "You are a helpful timeline generator that creates detailed study/achievement plans."
)

_TIMELINE_PROMPT = """
Create a detailed timeline for achieving the following goal:

Current Level: {current_level}
Goal: {goal}
Objectives: {objectives}
Current Date: {current_date}
Target Date: {target_date}

Please provide a timeline with specific tasks, including:
- Task title
- Task description
- Start date
- End date
- Duration (in days)
- Priority level (1-5, with 5 being highest)

Format your response as a JSON object with the following structure:
{{
  "title": "Timeline title",
  "description": "Overall timeline description",
  "startDate": "YYYY-MM-DD",
  "endDate": "YYYY-MM-DD",
  "tasks": [
    {{
      "title": "Task 1 title",
      "description": "Task 1 description",
      "startDate": "YYYY-MM-DD",
      "endDate": "YYYY-MM-DD",
      "duration": "X days",
      "priority": 5
    }},
    ...
  ]
}}
"""


class OpenAIError(RuntimeError):
    """The OpenAI API call failed."""


class TimelineParseError(ValueError):
    """The model's answer was not a usable timeline."""


def build_timeline_prompt(input: TimelineInput) -> str:
    """Return the user prompt asking for a timeline."""
    return _TIMELINE_PROMPT.format(
        current_level=input.current_level,
        goal=input.goal,
        objectives=input.objectives,
        current_date=input.current_date,
        target_date=input.target_date or "",
    )


def extract_json(content: str) -> str:
    """Return the span from the first '{' to the last '}', or content unchanged."""
    start = content.find("{")
    end = content.rfind("}")
    if start >= 0 and end > start:
        return content[start : end + 1]
    return content


def _parse_error(detail: str) -> TimelineParseError:
    return TimelineParseError(f"error parsing timeline JSON: {detail}")


def _string(obj: dict, key: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _parse_error(f"field {key!r} must be a string")
    return value


def _integer(obj: dict, key: str) -> int:
    value = obj.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise _parse_error(f"field {key!r} must be an integer")
    return value


def _object(value: Any, what: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise _parse_error(f"{what} must be an object")
    return value


def parse_timeline(content: str) -> Timeline:
    """Decode a timeline JSON document into a Timeline."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise _parse_error(str(exc)) from exc
    data = _object(data, "timeline")
    tasks_data = data.get("tasks")
    if tasks_data is None:
        tasks_data = []
    if not isinstance(tasks_data, list):
        raise _parse_error("field 'tasks' must be a list")
    tasks = []
    for item in tasks_data:
        task = _object(item, "task")
        tasks.append(
            TimelineTask(
                title=_string(task, "title"),
                description=_string(task, "description"),
                start_date=_string(task, "startDate"),
                end_date=_string(task, "endDate"),
                duration=_string(task, "duration"),
                priority=_integer(task, "priority"),
            )
        )
    return Timeline(
        title=_string(data, "title"),
        description=_string(data, "description"),
        start_date=_string(data, "startDate"),
        end_date=_string(data, "endDate"),
        tasks=tasks,
    )


class OpenAIClient:
    """A minimal chat completions client."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        model: str = GPT_3_5_TURBO,
        http_client: Optional[httpx.Client] = None,
        timeout: float = 60.0,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.Client(timeout=timeout)

    def _chat(self, messages: list[dict], temperature: float = 0.0) -> str:
        payload: dict[str, Any] = {"model": self._model, "messages": messages}
        if temperature:
            payload["temperature"] = temperature
        try:
            response = self._http.post(
                f"{self._base_url}/chat/completions",
                json=payload,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
        except httpx.HTTPError as exc:
            raise OpenAIError(f"OpenAI API error: {exc}") from exc
        if response.status_code >= 400:
            raise OpenAIError(
                f"OpenAI API error: status {response.status_code}: {response.text}"
            )
        try:
            body = response.json()
            choices = body["choices"]
        except (ValueError, KeyError, TypeError) as exc:
            raise OpenAIError(f"OpenAI API error: malformed response: {exc}") from exc
        if not choices:
            raise OpenAIError("OpenAI API error: response has no choices")
        try:
            return choices[0]["message"]["content"] or ""
        except (KeyError, TypeError) as exc:
            raise OpenAIError(f"OpenAI API error: malformed choice: {exc}") from exc

    def generate_completion(self, prompt: str) -> str:
        """Send a single user prompt and return the reply text."""
        return self._chat([{"role": "user", "content": prompt}])

    def generate_timeline(self, input: TimelineInput) -> Timeline:
        """Ask the model for a timeline and parse its answer."""
        content = self._chat(
            [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_timeline_prompt(input)},
            ],
            temperature=0.7,
        )
        return parse_timeline(extract_json(content))

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "OpenAIClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
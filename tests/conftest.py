"""Shared fixtures for notion_calendar tests.

The Notion API is replaced by ``httpx.MockTransport``; no test touches the
network.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

import httpx
import pytest

from notion_calendar.config import NotionCalendarSettings
from notion_calendar.models import Event, TemporalValue
from notion_calendar.notion_client import NotionClient
from tests.fixtures.notion_payloads import DB_ID, day

NOTION_ENV_VARS = (
    "NOTION_API_TOKEN",
    "NOTION_DB_ID",
    "NOTION_ICAL_PROD_ID",
    "NOTION_LOG_LEVEL",
    "NOTION_MAX_RETRIES",
    "NOTION_PAGE_SIZE",
    "NOTION_SKIP_INVALID_EVENTS",
    "NOTION_CALENDAR_DEBUG",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from host NOTION_* variables and any local .env file."""
    for name in NOTION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        "notion_calendar.config.DEFAULT_CONFIG_PATH", tmp_path / "missing-config.yaml"
    )


@pytest.fixture
def settings() -> NotionCalendarSettings:
    """Deterministic settings with fast retries."""
    return NotionCalendarSettings(
        api_token="secret-test-token",
        db_id=DB_ID,
        max_retries=2,
        retry_backoff_factor=1.0,
        ical_prod_id="-//test//notion-calendar//EN",
    )


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Factory for events with sensible defaults."""

    def _make(
        start: Optional[TemporalValue] = None,
        end: Optional[TemporalValue] = None,
        event_id: str = "abc-123-def",
        title: str = "Team Sync",
    ) -> Event:
        return Event(
            id=event_id,
            title=title,
            last_modified=datetime(2023, 11, 15, 11, 0, tzinfo=timezone.utc),
            start=start if start is not None else day(2024, 1, 1),
            end=end,
        )

    return _make


class RecordingTransport:
    """Handler for httpx.MockTransport that replays queued responses.

    Queued exceptions are raised instead of returned. Every request is kept
    in ``requests`` for assertions.
    """

    def __init__(self, responses: list[Union[httpx.Response, Exception]]):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request {request.method} {request.url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def mock_api() -> Callable[..., tuple[NotionClient, RecordingTransport]]:
    """Factory returning a NotionClient wired to a RecordingTransport."""

    def _make(
        responses: list[Union[httpx.Response, Exception]], **client_kwargs: Any
    ) -> tuple[NotionClient, RecordingTransport]:
        transport = RecordingTransport(responses)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(transport))
        client_kwargs.setdefault("max_retries", 2)
        client = NotionClient(api_token="secret-test-token", client=http_client, **client_kwargs)
        return client, transport

    return _make


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Replace retry backoff sleeps with a recorder of the requested delays."""
    delays: list[float] = []

    async def _sleep(seconds: float) -> None:
        delays.append(seconds)

    monkeypatch.setattr("notion_calendar.notion_client.asyncio.sleep", _sleep)
    return delays

"""Shared fixtures: temporary record store and a stubbed activity service."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from utils.activity import ActivityClient
from utils.store import RecordStore

ACTIVITY_URL = "https://activity.test/activity"

Handler = Callable[[httpx.Request], Any]


class ActivityStub:
    """Mock transport handler that records calls and replays a configured response."""

    def __init__(self) -> None:
        self.calls = 0
        self.handler: Handler = lambda request: httpx.Response(200, json={"activity": "running"})

    def respond_with(self, handler: Handler) -> None:
        self.handler = handler

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        result = self.handler(request)
        if hasattr(result, "__await__"):
            result = await result
        return result


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "users.txt"


@pytest.fixture
def store(store_path: Path) -> RecordStore:
    return RecordStore(store_path)


@pytest.fixture
def activity_stub() -> ActivityStub:
    return ActivityStub()


@pytest.fixture
def activity_client(activity_stub: ActivityStub) -> ActivityClient:
    return ActivityClient(
        url=ACTIVITY_URL,
        transport=httpx.MockTransport(activity_stub),
    )

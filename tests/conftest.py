"""
Shared fakes: clock, branch resolver, operations, HTTP responses
"""

from __future__ import annotations

import json

import pytest

from wakapi_core.heartbeat import HeartbeatBuilder
from wakapi_core.settings import MemoryStore, WakapiSettings


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubBranches:
    def __init__(self, branch: str = "main") -> None:
        self.branch = branch
        self.calls = 0

    def current_branch(self) -> str:
        self.calls += 1
        return self.branch


class FakeOperation:
    """Operation the test completes by hand."""

    def __init__(self, result=None, error=None, finished: bool = False) -> None:
        self.result = result
        self.error = error
        self.finished = finished
        self.polls = 0

    def done(self) -> bool:
        self.polls += 1
        return self.finished


class FakeResponse:
    def __init__(self, status_code: int = 201, payload=None, text: str | None = None) -> None:
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        return json.loads(self.text)


def ok_response(entity: str, time: int, id: str = "hb-1") -> FakeResponse:
    return FakeResponse(
        201,
        {"error": None, "data": {"id": id, "entity": entity, "type": "app", "time": time}},
    )


@pytest.fixture
def settings() -> WakapiSettings:
    store = MemoryStore(
        {
            "Enabled": True,
            "ApiKey": "secret-key",
            "BaseURL": "https://wakapi.test",
            "ActiveProject": "Demo",
        }
    )
    return WakapiSettings(store)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def builder(settings, clock) -> HeartbeatBuilder:
    return HeartbeatBuilder(
        settings, StubBranches(), clock=clock,
        os_name="Linux-6.1.0-x86_64-with-glibc2.36", machine="devbox",
    )

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from itertools import cycle

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from observable_app.config import Settings
from observable_app.main import create_app
from observable_app.metrics import AppMetrics, create_app_metrics
from observable_app.random_source import NumpyRandomSource

# Long enough that the background loop never ticks during a test.
IDLE_INTERVAL = 3600.0


class StubRandomSource:
    """Replays fixed draws so tests can pick the /random branch."""

    def __init__(self, floats=(0.1,), ints=(42,)) -> None:
        self._floats = cycle(floats)
        self._ints = cycle(ints)
        self.integer_calls = 0

    def random(self) -> float:
        return next(self._floats)

    def integers(self, low: int, high: int) -> int:
        self.integer_calls += 1
        return next(self._ints)


@pytest.fixture
def app_metrics() -> AppMetrics:
    return create_app_metrics()


@pytest.fixture
def stub_random() -> StubRandomSource:
    return StubRandomSource()


@pytest.fixture
def make_app(app_metrics: AppMetrics):
    def _make(random_source) -> FastAPI:
        return create_app(
            Settings(sample_interval_seconds=IDLE_INTERVAL),
            metrics=app_metrics,
            random_source=random_source,
        )

    return _make


@pytest.fixture
def client(make_app, stub_random: StubRandomSource) -> Iterator[TestClient]:
    with TestClient(make_app(stub_random)) as test_client:
        yield test_client


@pytest.fixture
async def api_client(make_app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=make_app(NumpyRandomSource(seed=7)))
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


@pytest.fixture
def stub_random_factory():
    return StubRandomSource

from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from taskboard.client import TaskClient
from taskboard.config import Settings
from taskboard.controller import TaskController
from taskboard.main import create_app
from taskboard.store import TaskStore, seed_tasks

from .fakes import FakeClock, FakeMillis


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(date(2026, 10, 19))


@pytest.fixture()
def millis() -> FakeMillis:
    return FakeMillis()


@pytest.fixture()
def store(clock: FakeClock, millis: FakeMillis) -> TaskStore:
    return TaskStore(seed_tasks(), today=clock, now_ms=millis)


@pytest.fixture()
def settings() -> Settings:
    return Settings(environment="test", seed_tasks=True)


@pytest.fixture()
def http(store: TaskStore, settings: Settings) -> TestClient:
    return TestClient(create_app(store=store, settings=settings))


@pytest.fixture()
def alerts() -> list[str]:
    return []


@pytest.fixture()
def controller(http: TestClient, alerts: list[str]) -> TaskController:
    return TaskController(TaskClient(http), alert=alerts.append, confirm=lambda message: True)

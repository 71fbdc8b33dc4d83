from __future__ import annotations

import pytest

from taskboard.config import load_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PORT", "HOST", "TASKBOARD_ENV", "ENVIRONMENT", "TASKBOARD_SEED", "TASKBOARD_API_URL"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.port == 4000
    assert settings.environment == "development"
    assert settings.seed_tasks is True
    assert settings.base_url == "http://localhost:4000"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "5050")
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.delenv("TASKBOARD_ENV", raising=False)
    monkeypatch.setenv("TASKBOARD_SEED", "off")
    monkeypatch.setenv("TASKBOARD_API_URL", "http://tasks.internal:8080")
    settings = load_settings()
    assert settings.port == 5050
    assert settings.environment == "production"
    assert settings.seed_tasks is False
    assert settings.base_url == "http://tasks.internal:8080"


def test_bad_port_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "not-a-port")
    assert load_settings().port == 4000

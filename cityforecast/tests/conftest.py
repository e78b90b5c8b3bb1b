"""Shared test fixtures."""

import json
import sqlite3
from datetime import UTC, datetime
from pathlib import Path

import pytest
import yaml

from cityforecast.config.defaults import DEFAULT_CITIES
from cityforecast.config.schema import AppConfig
from cityforecast.storage.database import connect, run_migrations

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def db(tmp_path: Path) -> sqlite3.Connection:
    conn = connect(tmp_path / "test.db")
    run_migrations(conn)
    yield conn
    conn.close()


@pytest.fixture
def default_config() -> AppConfig:
    """Return default AppConfig with default cities."""
    return AppConfig(cities=DEFAULT_CITIES)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api": {"base_url": "https://test-7timer.example.com/bin/api.pl"},
        "status": {"fade_after_seconds": 2.0},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def paris_forecast() -> dict:
    with open(FIXTURE_DIR / "civillight_paris.json") as f:
        return json.load(f)


@pytest.fixture
def new_year() -> datetime:
    return datetime(2024, 1, 1, 6, 0, tzinfo=UTC)


class FakeTimer:
    """Stand-in for threading.Timer that fires only when told to."""

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function()


@pytest.fixture
def fake_timers() -> list[FakeTimer]:
    return []


@pytest.fixture
def timer_factory(fake_timers):
    def factory(interval, function):
        timer = FakeTimer(interval, function)
        fake_timers.append(timer)
        return timer

    return factory

"""Pytest configuration and fixtures."""

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from logstamp.core import config as config_module


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def in_temp_dir(temp_dir, monkeypatch):
    """Run the test from an empty directory with an empty home."""
    monkeypatch.chdir(temp_dir)
    monkeypatch.setenv("HOME", str(temp_dir))
    yield temp_dir


@pytest.fixture
def now():
    """A fixed "now": 2024-02-05 21:00:00 UTC."""
    return datetime(2024, 2, 5, 21, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_config(temp_dir):
    """Create a sample configuration file."""
    config_content = '''
precision = 3
format = "%F %T"
relative = true
timezone = "Europe/London"
'''
    config_file = temp_dir / "logstamp.toml"
    config_file.write_text(config_content)
    return config_file


class FakeClock:
    """Deterministic nanosecond clock for tests."""

    def __init__(self, start_ns: int) -> None:
        self.value = start_ns

    def __call__(self) -> int:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += int(seconds * 1_000_000_000)


@pytest.fixture
def fake_clock():
    """Factory for :class:`FakeClock` instances."""
    return FakeClock


@pytest.fixture
def clean_env():
    """Clean environment variables that might affect tests."""
    env_vars = ["TZ"]
    old_values = {var: os.environ.get(var) for var in env_vars}

    for var in env_vars:
        if var in os.environ:
            del os.environ[var]

    yield

    for var, value in old_values.items():
        if value is not None:
            os.environ[var] = value
        elif var in os.environ:
            del os.environ[var]


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Drop any cached global configuration between tests."""
    config_module._cached_config = None
    yield
    config_module._cached_config = None

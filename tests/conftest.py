"""Shared fixtures for the icalimporter test suite."""

from collections.abc import Generator
from datetime import datetime, timezone
from typing import Any

import pytest

from icalimporter.config.settings import ImporterSettings
from icalimporter.timezone import get_timezone


@pytest.fixture(autouse=True)
def clean_test_environment(monkeypatch: Any) -> Generator[None, Any, None]:
    """Ensure ICALIMPORTER_* environment variables never leak into tests."""
    import os

    for name in list(os.environ):
        if name.upper().startswith("ICALIMPORTER_"):
            monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def test_timezone() -> str:
    """Deterministic default zone so floating times do not depend on the host."""
    return "America/Los_Angeles"


@pytest.fixture
def default_tz(test_timezone: str) -> Any:
    return get_timezone(test_timezone)


@pytest.fixture
def settings(test_timezone: str) -> ImporterSettings:
    """Importer settings without file or environment input."""
    return ImporterSettings(default_timezone=test_timezone, request_timeout=5)


@pytest.fixture
def import_now() -> datetime:
    """Reference time for stale-event cutoffs: before every sample event."""
    return datetime(2024, 1, 5, 12, 0, tzinfo=timezone.utc)

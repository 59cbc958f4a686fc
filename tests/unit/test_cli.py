"""Tests for the command-line entry point."""

import json

import httpx
import pytest

from icalimporter import __main__ as cli
from icalimporter.ics.fetcher import ICSFetcher
from tests.fixtures.ics_samples import DUPLICATE_EVENTS_CALENDAR

pytestmark = [pytest.mark.unit, pytest.mark.fast]


@pytest.fixture(autouse=True)
def reset_root_logger():
    import logging

    yield
    logger = logging.getLogger("icalimporter")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


def patch_fetcher(monkeypatch: pytest.MonkeyPatch, handler) -> None:
    def factory(settings):
        return ICSFetcher(settings, transport=httpx.MockTransport(handler))

    monkeypatch.setattr(cli, "ICSFetcher", factory)


def future_calendar() -> str:
    return DUPLICATE_EVENTS_CALENDAR.replace("2024", "2999")


class TestMain:
    def test_prints_events_as_json(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        patch_fetcher(monkeypatch, lambda request: httpx.Response(200, text=future_calendar()))

        exit_code = cli.main(
            ["webcal://example.com/feed.ics", "--name", "Example", "--timezone", "UTC"]
        )

        assert exit_code == 0
        events = json.loads(capsys.readouterr().out)
        assert len(events) == 1
        assert events[0]["title"] == "Repeat Listing"
        assert events[0]["start_time"] == "2999-01-20T10:00:00+00:00"
        assert events[0]["source"] == {"name": "Example", "url": "webcal://example.com/feed.ics"}

    def test_source_name_defaults_to_url(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        patch_fetcher(monkeypatch, lambda request: httpx.Response(200, text=future_calendar()))

        cli.main(["https://example.com/feed.ics"])

        events = json.loads(capsys.readouterr().out)
        assert events[0]["source"]["name"] == "https://example.com/feed.ics"

    def test_fetch_failure_exits_with_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        patch_fetcher(monkeypatch, lambda request: httpx.Response(503))

        assert cli.main(["https://example.com/feed.ics"]) == 1
        assert capsys.readouterr().out == ""

    def test_invalid_timezone_exits_with_usage_error(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert cli.main(["https://example.com/feed.ics", "--timezone", "Not/AZone"]) == 2
        assert "Invalid configuration" in capsys.readouterr().err

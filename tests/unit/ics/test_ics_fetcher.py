"""Unit tests for ICSFetcher."""

from collections.abc import Callable

import httpx
import pytest

from icalimporter.config.settings import ImporterSettings
from icalimporter.ics.exceptions import ICSFetchError, ICSNetworkError
from icalimporter.ics.fetcher import ICSFetcher
from tests.fixtures.ics_samples import VENUE_CALENDAR

pytestmark = [pytest.mark.unit, pytest.mark.fast]


def make_fetcher(
    settings: ImporterSettings, handler: Callable[[httpx.Request], httpx.Response]
) -> ICSFetcher:
    return ICSFetcher(settings, transport=httpx.MockTransport(handler))


class TestICSFetcher:
    """Tests for ICSFetcher.fetch."""

    def test_returns_response_text(self, settings: ImporterSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text=VENUE_CALENDAR)

        with make_fetcher(settings, handler) as fetcher:
            assert fetcher.fetch("https://example.com/events.ics") == VENUE_CALENDAR

    def test_webcal_url_is_requested_over_http(self, settings: ImporterSettings) -> None:
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, text="BEGIN:VCALENDAR\nEND:VCALENDAR\n")

        with make_fetcher(settings, handler) as fetcher:
            fetcher.fetch("webcal://example.com/events.ics")

        assert requested == ["http://example.com/events.ics"]

    def test_sends_client_headers(self, settings: ImporterSettings) -> None:
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.headers)
            return httpx.Response(200, text="")

        with make_fetcher(settings, handler) as fetcher:
            fetcher.fetch("https://example.com/events.ics")

        assert seen["user-agent"] == "icalimporter/1.0.0 ICS-Client"
        assert "text/calendar" in seen["accept"]

    def test_error_status_raises_fetch_error(self, settings: ImporterSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404)

        with make_fetcher(settings, handler) as fetcher:
            with pytest.raises(ICSFetchError) as exc_info:
                fetcher.fetch("https://example.com/missing.ics")

        assert exc_info.value.status_code == 404
        assert "HTTP 404" in str(exc_info.value)
        assert not isinstance(exc_info.value, ICSNetworkError)

    def test_timeout_raises_network_error(self, settings: ImporterSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with make_fetcher(settings, handler) as fetcher:
            with pytest.raises(ICSNetworkError, match="timeout after 5s"):
                fetcher.fetch("https://example.com/slow.ics")

    def test_connection_failure_raises_network_error(self, settings: ImporterSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with make_fetcher(settings, handler) as fetcher:
            with pytest.raises(ICSNetworkError, match="Network error") as exc_info:
                fetcher.fetch("https://example.com/down.ics")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_client_created_lazily_and_closed(self, settings: ImporterSettings) -> None:
        fetcher = make_fetcher(settings, lambda request: httpx.Response(200, text=""))
        assert fetcher.client is None

        fetcher.fetch("https://example.com/events.ics")
        assert fetcher.client is not None
        assert not fetcher.client.is_closed

        fetcher.close()
        assert fetcher.client.is_closed

"""Unit tests for StalenessFilter."""

from datetime import datetime, timedelta, timezone

import pytest
from icalendar import Calendar

from icalimporter.domain.staleness import StalenessFilter
from tests.fixtures.ics_samples import calendar_with_event

pytestmark = [pytest.mark.unit, pytest.mark.fast]

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


def vevent(*lines: str):
    return Calendar.from_ical(calendar_with_event(*lines)).walk("VEVENT")[0]


def ical_utc(value: datetime) -> str:
    return value.strftime("%Y%m%dT%H%M%SZ")


@pytest.fixture
def staleness(default_tz) -> StalenessFilter:
    return StalenessFilter.yesterday(default_tz, now=NOW)


class TestStalenessFilter:
    """Tests for StalenessFilter."""

    def test_cutoff_is_window_before_now(self, default_tz) -> None:
        staleness = StalenessFilter.yesterday(default_tz, now=NOW, window_hours=6)

        assert staleness.cutoff == NOW - timedelta(hours=6)

    def test_naive_now_read_in_default_zone(self, default_tz) -> None:
        staleness = StalenessFilter.yesterday(default_tz, now=datetime(2024, 3, 10, 12, 0))
        component = vevent("DTSTART:20240309T100000Z", "DTEND:20240309T110000Z")

        assert staleness.cutoff == datetime(2024, 3, 9, 12, 0, tzinfo=default_tz)
        assert staleness.is_stale(component)

    def test_event_ended_two_days_ago_is_stale(self, staleness: StalenessFilter) -> None:
        ended = NOW - timedelta(days=2)
        component = vevent(
            f"DTSTART:{ical_utc(ended - timedelta(hours=1))}", f"DTEND:{ical_utc(ended)}"
        )

        assert staleness.is_stale(component)
        assert staleness.filter([component]) == []

    def test_event_ending_soon_is_kept(self, staleness: StalenessFilter) -> None:
        component = vevent(
            f"DTSTART:{ical_utc(NOW - timedelta(hours=1))}",
            f"DTEND:{ical_utc(NOW + timedelta(hours=1))}",
        )

        assert not staleness.is_stale(component)
        assert staleness.filter([component]) == [component]

    def test_start_used_when_end_missing(self, staleness: StalenessFilter) -> None:
        old = vevent(f"DTSTART:{ical_utc(NOW - timedelta(days=3))}")
        recent = vevent(f"DTSTART:{ical_utc(NOW - timedelta(hours=2))}")

        assert staleness.is_stale(old)
        assert not staleness.is_stale(recent)

    def test_long_running_event_kept_by_its_end(self, staleness: StalenessFilter) -> None:
        component = vevent(
            f"DTSTART:{ical_utc(NOW - timedelta(days=5))}",
            f"DTEND:{ical_utc(NOW + timedelta(days=1))}",
        )

        assert not staleness.is_stale(component)

    def test_floating_end_read_in_default_zone(self, staleness: StalenessFilter) -> None:
        # 2024-03-09T04:30 in Los Angeles is 12:30 UTC, just after the cutoff
        component = vevent("DTSTART:20240309T030000", "DTEND:20240309T043000")

        assert not staleness.is_stale(component)

    def test_date_only_end_is_midnight_in_default_zone(self, staleness: StalenessFilter) -> None:
        component = vevent("DTSTART;VALUE=DATE:20240301", "DTEND;VALUE=DATE:20240302")

        assert staleness.is_stale(component)

    def test_event_without_times_is_kept(self, staleness: StalenessFilter) -> None:
        component = vevent("SUMMARY:Undated")

        assert staleness.effective_end(component) is None
        assert not staleness.is_stale(component)

    def test_filter_preserves_order(self, staleness: StalenessFilter) -> None:
        first = vevent("SUMMARY:First", f"DTSTART:{ical_utc(NOW + timedelta(days=2))}")
        stale = vevent("SUMMARY:Stale", f"DTSTART:{ical_utc(NOW - timedelta(days=2))}")
        second = vevent("SUMMARY:Second", f"DTSTART:{ical_utc(NOW + timedelta(days=1))}")

        assert staleness.filter([first, stale, second]) == [first, second]

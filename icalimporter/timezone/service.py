"""Core timezone helpers for the importer.

Floating calendar times carry no zone of their own, so every conversion here
takes the zone explicitly instead of reading it from global state.
"""

import logging
from datetime import date, datetime, time, tzinfo
from functools import lru_cache
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TZ_NAME = "America/Los_Angeles"


class TimezoneError(Exception):
    """Raised when timezone operations fail."""


@lru_cache(maxsize=32)
def get_timezone(name: str) -> ZoneInfo:
    """Resolve an IANA timezone name.

    Args:
        name: Timezone identifier such as ``America/New_York``

    Returns:
        ZoneInfo for the name

    Raises:
        TimezoneError: If the name is unknown
    """
    try:
        tz = ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise TimezoneError(f"Unknown timezone '{name}'") from e
    logger.debug(f"Resolved timezone: {name}")
    return tz


def localize_floating(value: Union[date, datetime], tz: tzinfo) -> datetime:
    """Read a floating calendar value as wall-clock time in ``tz``.

    Naive datetimes get ``tz`` attached, dates become midnight in ``tz`` and
    aware datetimes (UTC literals) keep their instant, expressed in ``tz``.

    Raises:
        TypeError: If value is not a date or datetime
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=tz)
        return value.astimezone(tz)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=tz)
    raise TypeError(f"Expected date or datetime object, got {type(value)}")


def ensure_timezone_aware(value: Union[date, datetime], tz: tzinfo) -> datetime:
    """Return an aware datetime, leaving aware values untouched."""
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value
    return localize_floating(value, tz)


def now_in_timezone(tz: tzinfo) -> datetime:
    """Get current time in the given timezone."""
    return datetime.now(tz)

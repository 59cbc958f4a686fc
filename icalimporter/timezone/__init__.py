"""
Timezone package for the importer.

Example usage:
    >>> from icalimporter.timezone import get_timezone, localize_floating
    >>> from datetime import datetime
    >>>
    >>> tz = get_timezone("America/New_York")
    >>> localize_floating(datetime(2024, 1, 1, 12, 0), tz).isoformat()
    '2024-01-01T12:00:00-05:00'
"""

from .service import (
    DEFAULT_TZ_NAME,
    TimezoneError,
    ensure_timezone_aware,
    get_timezone,
    localize_floating,
    now_in_timezone,
)

__all__ = [
    "DEFAULT_TZ_NAME",
    "TimezoneError",
    "ensure_timezone_aware",
    "get_timezone",
    "localize_floating",
    "now_in_timezone",
]

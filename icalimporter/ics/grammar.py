"""Thin adapter over the icalendar library's grammar parser.

The adapter is the only place that knows how icalendar signals a rejected
document. It turns that signal into ``ICSDocumentRejectedError`` so callers
can tell a malformed feed apart from an internal failure without inspecting
error messages.
"""

import logging
from collections.abc import Iterable

from icalendar import Calendar
from icalendar.parser import Contentline, Contentlines

from .exceptions import ICSDocumentRejectedError

logger = logging.getLogger(__name__)

REJECTED_PREFIX = "Invalid icalendar file"


def parse_calendars(content: str) -> list[Calendar]:
    """Parse text into every VCALENDAR tree it contains.

    Args:
        content: Normalized calendar text

    Returns:
        Parsed calendars, possibly empty

    Raises:
        ICSDocumentRejectedError: If the grammar rejects the document
    """
    try:
        calendars: list[Calendar] = Calendar.from_ical(content, multiple=True)
    except ValueError as e:
        raise ICSDocumentRejectedError(f"{REJECTED_PREFIX}: {e}") from e
    return calendars


def parse_vcard(content: str) -> list[Contentline]:
    """Parse a vCard-like region such as a VVENUE block into content lines.

    Only the content-line grammar is applied. Folded lines are joined and
    every line must split into name, parameters and value, but values are
    not typed, so a GEO with three parts or a non-numeric GEO survives as
    its raw text.

    Raises:
        ICSDocumentRejectedError: If a line is not a valid content line
    """
    try:
        lines = [line for line in Contentlines.from_ical(content) if line]
        for line in lines:
            line.parts()
    except ValueError as e:
        raise ICSDocumentRejectedError(f"{REJECTED_PREFIX}: {e}") from e
    return lines


def serialize_properties(lines: Iterable[Contentline]) -> list[str]:
    """Serialize parsed content lines back to unfolded ``KEY;params:value`` strings.

    Lines keep document order and include the BEGIN/END markers and any
    ``X-`` extension properties. Values keep their iCalendar text escaping.
    """
    return [str(line) for line in lines if line]

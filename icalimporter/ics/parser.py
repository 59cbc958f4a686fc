"""Calendar document parser with soft failure for malformed feeds."""

import logging
from typing import Callable, Optional

from icalendar import Calendar, Event as ICalEvent

from . import grammar
from .exceptions import ICSDocumentRejectedError, ICSParseError

logger = logging.getLogger(__name__)


class CalendarDocumentParser:
    """Parse normalized calendar text into VCALENDAR trees.

    Malformed third-party feeds are common, so a document the grammar rejects
    yields no calendars. Any other failure is unexpected and is raised as
    ``ICSParseError``.
    """

    def __init__(self, parse_calendars: Optional[Callable[[str], list[Calendar]]] = None) -> None:
        """Initialize parser.

        Args:
            parse_calendars: Grammar parsing capability, defaults to the icalendar adapter
        """
        self._parse_calendars = parse_calendars or grammar.parse_calendars

    def parse(self, content: str, source_url: Optional[str] = None) -> list[Calendar]:
        """Parse content into calendars.

        Args:
            content: Normalized calendar text
            source_url: Optional source URL used in log messages

        Returns:
            Parsed calendars; empty when the document was rejected

        Raises:
            ICSParseError: If parsing failed for any reason other than rejection
        """
        label = source_url or "<content>"
        try:
            calendars = self._parse_calendars(content)
        except ICSDocumentRejectedError as e:
            logger.warning("Giving up on %s: %s", label, e.message)
            return []
        except Exception as e:
            logger.exception("Unexpected error parsing %s", label)
            raise ICSParseError(f"Failed to parse calendar {label}: {e}") from e

        logger.debug("Parsed %d calendar(s) from %s", len(calendars), label)
        return calendars

    @staticmethod
    def events(calendar: Calendar) -> list[ICalEvent]:
        """Return the VEVENT components owned by a calendar, in document order."""
        return calendar.walk("VEVENT")

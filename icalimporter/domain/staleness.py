"""Drop events that ended before the import cutoff."""

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta, tzinfo
from typing import Optional

from icalendar import Event as ICalEvent

from ..timezone import ensure_timezone_aware, now_in_timezone

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_HOURS = 24


class StalenessFilter:
    """Filter raw VEVENT components whose effective end is before a cutoff.

    The effective end is DTEND when present, otherwise DTSTART. Floating and
    date-only values are read in the importer's default zone.
    """

    def __init__(self, cutoff: datetime, default_timezone: tzinfo) -> None:
        self.cutoff = cutoff
        self.default_timezone = default_timezone

    @classmethod
    def yesterday(
        cls,
        default_timezone: tzinfo,
        now: Optional[datetime] = None,
        window_hours: int = DEFAULT_WINDOW_HOURS,
    ) -> "StalenessFilter":
        """Build a filter whose cutoff is ``window_hours`` before ``now``.

        A naive ``now`` is read in ``default_timezone``.
        """
        if now is None:
            now = now_in_timezone(default_timezone)
        else:
            now = ensure_timezone_aware(now, default_timezone)
        return cls(now - timedelta(hours=window_hours), default_timezone)

    def effective_end(self, component: ICalEvent) -> Optional[datetime]:
        prop = component.get("DTEND")
        if prop is None:
            prop = component.get("DTSTART")
        if prop is None:
            return None
        return ensure_timezone_aware(prop.dt, self.default_timezone)

    def is_stale(self, component: ICalEvent) -> bool:
        """Check if the component ended before the cutoff."""
        end = self.effective_end(component)
        return end is not None and end < self.cutoff

    def filter(self, components: Iterable[ICalEvent]) -> list[ICalEvent]:
        """Return the components that are not stale, in order."""
        fresh = []
        for component in components:
            if self.is_stale(component):
                logger.debug(f"Skipping stale event {component.get('UID', '<no uid>')}")
                continue
            fresh.append(component)
        return fresh

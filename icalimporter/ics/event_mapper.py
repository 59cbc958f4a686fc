"""Map parsed VEVENT components to domain events."""

import logging
from datetime import datetime, tzinfo
from typing import Any, Optional

from icalendar import Event as ICalEvent

from ..timezone import ensure_timezone_aware, localize_floating
from .models import DomainEvent

logger = logging.getLogger(__name__)


def _text(component: ICalEvent, name: str) -> Optional[str]:
    value = component.get(name)
    if value is None:
        return None
    return str(value)


def has_tzid(prop: Any) -> bool:
    """Check if a date-time property is qualified with a TZID parameter."""
    params = getattr(prop, "params", None)
    return bool(params and params.get("TZID"))


class EventFieldMapper:
    """Build DomainEvents from VEVENT components.

    A DTSTART with a TZID parameter is a fixed instant and is used as parsed.
    Anything else is a floating time and is read as wall-clock time in the
    importer's default zone, never in UTC or the host's zone.
    """

    def __init__(self, default_timezone: tzinfo) -> None:
        """Initialize event mapper.

        Args:
            default_timezone: Zone used to interpret floating times
        """
        self.default_timezone = default_timezone

    def to_event(self, component: ICalEvent) -> Optional[DomainEvent]:
        """Map one VEVENT to a DomainEvent.

        Args:
            component: Parsed VEVENT component

        Returns:
            DomainEvent, or None when the component has no DTSTART
        """
        if component.get("DTSTART") is None:
            logger.warning(f"Event {component.get('UID', '<no uid>')} missing DTSTART, skipping")
            return None

        start_time = self.start_time(component)
        return DomainEvent(
            title=_text(component, "SUMMARY"),
            description=_text(component, "DESCRIPTION"),
            url=_text(component, "URL"),
            start_time=start_time,
            end_time=self.end_time(component, start_time),
        )

    def start_time(self, component: ICalEvent) -> datetime:
        """Resolve DTSTART in fixed or floating mode."""
        dtstart = component["DTSTART"]
        if has_tzid(dtstart):
            return self._fixed(dtstart)
        return self.floating(dtstart)

    def end_time(self, component: ICalEvent, start_time: Optional[datetime] = None) -> datetime:
        """Resolve the end time, mirroring the start time's mode.

        Priority: DTEND of a TZID-qualified event, floating DTEND, start plus
        DURATION, then the start time itself.
        """
        if start_time is None:
            start_time = self.start_time(component)

        dtend = component.get("DTEND")
        if has_tzid(component["DTSTART"]) and dtend is not None:
            return self._fixed(dtend)
        if dtend is not None:
            return self.floating(dtend)

        duration = component.get("DURATION")
        if duration is not None:
            return start_time + duration.dt

        return start_time

    def floating(self, prop: Any) -> datetime:
        """Read a date-time property's literal as wall-clock time in the default zone.

        A TZID on the property is ignored; a UTC literal keeps its instant.
        """
        value = prop.dt
        if has_tzid(prop) and isinstance(value, datetime):
            value = value.replace(tzinfo=None)
        return localize_floating(value, self.default_timezone)

    def _fixed(self, prop: Any) -> datetime:
        return ensure_timezone_aware(prop.dt, self.default_timezone)

"""Persistence lookup used to collapse imported records onto existing ones."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..ics.models import DomainEvent, DomainVenue

logger = logging.getLogger(__name__)


class EquivalenceLookup(Protocol):
    """Protocol for the persistence layer's duplicate lookup."""

    def find_equivalent_event(self, event: DomainEvent) -> Optional[DomainEvent]:
        """Return the stored event equivalent to ``event``, if any.

        Args:
            event: Freshly imported event

        Returns:
            Existing event or None
        """
        ...

    def find_equivalent_venue(self, venue: DomainVenue) -> Optional[DomainVenue]:
        """Return the stored venue equivalent to ``venue``, if any.

        Args:
            venue: Freshly imported venue

        Returns:
            Existing venue or None
        """
        ...


class InMemoryRecordStore:
    """In-process record store implementing ``EquivalenceLookup``.

    Events are equivalent when title and start time match; venues when title
    and street address match. Nothing is persisted across processes.
    """

    def __init__(self) -> None:
        self._events: list[DomainEvent] = []
        self._venues: list[DomainVenue] = []

    @property
    def events(self) -> list[DomainEvent]:
        return list(self._events)

    @property
    def venues(self) -> list[DomainVenue]:
        return list(self._venues)

    def add_event(self, event: DomainEvent) -> None:
        """Store an event and its venue."""
        self._events.append(event)
        if event.venue is not None:
            self.add_venue(event.venue)

    def add_venue(self, venue: DomainVenue) -> None:
        """Store a venue unless an equivalent one is already stored."""
        if self.find_equivalent_venue(venue) is None:
            self._venues.append(venue)

    def find_equivalent_event(self, event: DomainEvent) -> Optional[DomainEvent]:
        for existing in self._events:
            if existing.title == event.title and existing.start_time == event.start_time:
                logger.debug("Event %r matches a stored event", event.title)
                return existing
        return None

    def find_equivalent_venue(self, venue: DomainVenue) -> Optional[DomainVenue]:
        for existing in self._venues:
            if existing.title == venue.title and existing.street_address == venue.street_address:
                return existing
        return None

"""Collapse imported events and venues onto existing records and each other."""

import logging
from collections.abc import Iterable

from ..ics.models import DomainEvent
from ..sources.store import EquivalenceLookup

logger = logging.getLogger(__name__)


class Deduplicator:
    """Replace events and venues with stored equivalents, then drop repeats."""

    def __init__(self, lookup: EquivalenceLookup) -> None:
        self.lookup = lookup

    def deduplicate(self, events: Iterable[DomainEvent]) -> list[DomainEvent]:
        """Deduplicate one import run's events.

        Each event is swapped for a copy of its stored equivalent, if the
        lookup knows one, and its venue for the stored equivalent venue.
        Exact duplicates are then removed, keeping the first occurrence and
        the original order.

        Args:
            events: Events built by the import run, in document order

        Returns:
            Deduplicated events
        """
        substituted = [self._substitute(event) for event in events]

        unique: list[DomainEvent] = []
        for event in substituted:
            if event not in unique:
                unique.append(event)

        if len(unique) != len(substituted):
            logger.info(f"Removed {len(substituted) - len(unique)} duplicate event(s)")
        return unique

    def _substitute(self, event: DomainEvent) -> DomainEvent:
        existing = self.lookup.find_equivalent_event(event)
        if existing is not None:
            # stored records are never modified
            event = existing.model_copy()
        if event.venue is not None:
            event.venue = self.lookup.find_equivalent_venue(event.venue) or event.venue
        return event

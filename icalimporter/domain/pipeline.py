"""Import pipeline turning calendar feeds into deduplicated domain events.

Usage:
    settings = load_settings("config.yaml")
    with ICSFetcher(settings) as fetcher:
        importer = CalendarImporter(settings, fetcher=fetcher)
        events = importer.import_source(CalendarSource(name="Venue", url="webcal://..."))

The document is read in two independent passes over the same normalized
text: the grammar pass builds calendar trees from the text with its VVENUE
regions removed, the text pass recovers those regions as venue blocks.
Events are joined to venue blocks only by UID.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from ..ics.event_mapper import EventFieldMapper
from ..ics.fetcher import ICSFetcher
from ..ics.models import CalendarSource, DomainEvent
from ..ics.normalizer import normalize_content
from ..ics.parser import CalendarDocumentParser
from ..ics.venues import VenueResolver, extract_venue_blocks, strip_venue_blocks
from ..sources.geocoding import Geocoder
from ..sources.store import EquivalenceLookup, InMemoryRecordStore
from .dedup import Deduplicator
from .staleness import StalenessFilter

logger = logging.getLogger(__name__)


class CalendarImporter:
    """Run one calendar document through every import stage.

    Each call works on its own parsed components, venue blocks and dedup
    working set; only the geocoder and lookup collaborators are shared.
    """

    def __init__(
        self,
        settings: Any,
        fetcher: Optional[ICSFetcher] = None,
        parser: Optional[CalendarDocumentParser] = None,
        geocoder: Optional[Geocoder] = None,
        lookup: Optional[EquivalenceLookup] = None,
    ) -> None:
        """Initialize importer.

        Args:
            settings: Importer settings (default timezone, staleness window)
            fetcher: HTTP fetcher, required only by ``import_source``
            parser: Calendar document parser
            geocoder: Geocoding collaborator for resolved venues
            lookup: Persistence lookup used by deduplication
        """
        self.settings = settings
        self.fetcher = fetcher
        self.parser = parser or CalendarDocumentParser()
        self.mapper = EventFieldMapper(settings.tz)
        self.venue_resolver = VenueResolver(geocoder)
        self.deduplicator = Deduplicator(lookup if lookup is not None else InMemoryRecordStore())

    def import_source(
        self, source: CalendarSource, now: Optional[datetime] = None
    ) -> list[DomainEvent]:
        """Fetch and import a calendar source.

        Raises:
            ICSFetchError: If the server answers with an error status
            ICSNetworkError: If the feed cannot be reached
            ICSParseError: If parsing fails for a reason other than a rejected document
        """
        if self.fetcher is None:
            self.fetcher = ICSFetcher(self.settings)
        content = self.fetcher.fetch(source.url)
        return self.import_content(content, source=source, now=now)

    def import_content(
        self,
        content: str,
        source: Optional[CalendarSource] = None,
        now: Optional[datetime] = None,
    ) -> list[DomainEvent]:
        """Import raw calendar text.

        Args:
            content: Raw calendar text
            source: Source the text came from, attached to every event
            now: Reference time for the stale-event cutoff, defaults to the current time

        Returns:
            Deduplicated events in document order; empty for a rejected document

        Raises:
            ICSParseError: If parsing fails for a reason other than a rejected document
        """
        source_url = source.url if source else None
        content = normalize_content(content)

        calendars = self.parser.parse(strip_venue_blocks(content), source_url=source_url)
        if not calendars:
            return []

        venue_blocks = extract_venue_blocks(content)
        staleness = StalenessFilter.yesterday(
            self.settings.tz, now=now, window_hours=self.settings.staleness_window_hours
        )

        events: list[DomainEvent] = []
        for calendar in calendars:
            for component in staleness.filter(self.parser.events(calendar)):
                event = self.mapper.to_event(component)
                if event is None:
                    continue
                event.venue = self.venue_resolver.resolve(component, venue_blocks)
                event.source = source
                events.append(event)

        deduplicated = self.deduplicator.deduplicate(events)
        logger.info(
            f"Imported {len(deduplicated)} event(s) from {source_url or '<content>'} "
            f"({len(calendars)} calendar(s), {len(venue_blocks)} venue block(s))"
        )
        return deduplicated

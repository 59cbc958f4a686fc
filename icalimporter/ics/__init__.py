"""ICS calendar downloading, parsing and mapping module."""

from .event_mapper import EventFieldMapper
from .exceptions import (
    ICSDocumentRejectedError,
    ICSError,
    ICSFetchError,
    ICSNetworkError,
    ICSParseError,
)
from .fetcher import ICSFetcher
from .models import CalendarSource, DomainEvent, DomainVenue
from .normalizer import normalize_content, normalize_url_scheme
from .parser import CalendarDocumentParser
from .venues import (
    VenueBlock,
    VenueResolver,
    extract_venue_blocks,
    map_vcard_lines,
    strip_venue_blocks,
)

__all__ = [
    "CalendarDocumentParser",
    "CalendarSource",
    "DomainEvent",
    "DomainVenue",
    "EventFieldMapper",
    "ICSDocumentRejectedError",
    "ICSError",
    "ICSFetchError",
    "ICSFetcher",
    "ICSNetworkError",
    "ICSParseError",
    "VenueBlock",
    "VenueResolver",
    "extract_venue_blocks",
    "map_vcard_lines",
    "normalize_content",
    "normalize_url_scheme",
    "strip_venue_blocks",
]

"""VVENUE extraction and venue resolution.

The VVENUE extension is not part of the grammar the icalendar library
understands as a venue, so venue blocks are recovered by scanning the same
normalized text that produced the calendar trees. Events refer to a block
only through the ``VVENUE`` parameter of their LOCATION property.
"""

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

from icalendar import Event as ICalEvent, vText

from ..sources.geocoding import Geocoder, NullGeocoder
from . import grammar
from .exceptions import ICSDocumentRejectedError
from .models import DomainVenue

logger = logging.getLogger(__name__)

VENUE_CONTENT_RE = re.compile(r"^BEGIN:VVENUE$.*?^END:VVENUE$", re.MULTILINE | re.DOTALL)
VENUE_UID_RE = re.compile(r"^UID:(?P<uid>.+)$", re.MULTILINE)
VCARD_LINE_RE = re.compile(r"^(?P<key>[^;]+?)(?P<qualifier>;[^:]*?)?:(?P<value>.*)$")

# vCard key -> DomainVenue field
VCARD_TEXT_FIELDS = {
    "NAME": "title",
    "ADDRESS": "street_address",
    "CITY": "locality",
    "REGION": "region",
    "POSTALCODE": "postal_code",
    "COUNTRY": "country",
}


def map_vcard_lines(lines: Iterable[str]) -> dict[str, str]:
    """Build a key -> value mapping from ``KEY[;qualifier]:VALUE`` lines.

    The qualifier is ignored, lines that do not match are skipped and the
    first occurrence of a key wins.
    """
    fields: dict[str, str] = {}
    for line in lines:
        match = VCARD_LINE_RE.match(line.rstrip("\r\n"))
        if match:
            fields.setdefault(match.group("key"), match.group("value"))
    return fields


def parse_geo(value: Optional[str]) -> tuple[Optional[float], Optional[float]]:
    """Split a ``lat;lon`` GEO value into floats.

    Only the first and last parts are used, so a malformed value with extra
    parts still yields coordinates. Unparseable parts become None.
    """
    if not value:
        return None, None

    parts = value.split(";")
    return _to_float(parts[0]), _to_float(parts[-1])


def _to_float(value: str) -> Optional[float]:
    try:
        return float(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class VenueBlock:
    """A ``BEGIN:VVENUE ... END:VVENUE`` text region."""

    content: str

    @property
    def uid(self) -> Optional[str]:
        """Value of the block's ``UID:`` line, or None if it has none."""
        match = VENUE_UID_RE.search(self.content)
        return match.group("uid") if match else None

    def vcard_fields(self) -> Optional[dict[str, str]]:
        """Parse the block's vCard into a field mapping.

        Only the first VVENUE region is used. Returns None when the block has
        no such region or the grammar parser rejects it.
        """
        match = VENUE_CONTENT_RE.search(self.content)
        if match is None:
            return None

        try:
            vcard = grammar.parse_vcard(match.group(0))
        except ICSDocumentRejectedError as e:
            logger.debug("Ignoring unparseable venue %s: %s", self.uid, e.message)
            return None

        return map_vcard_lines(grammar.serialize_properties(vcard))


def extract_venue_blocks(content: str) -> list[VenueBlock]:
    """Return every VVENUE region in the text, in document order."""
    return [VenueBlock(match.group(0)) for match in VENUE_CONTENT_RE.finditer(content)]


def strip_venue_blocks(content: str) -> str:
    """Remove every VVENUE region from the text.

    The calendar grammar types VVENUE properties strictly, so a single
    malformed GEO would reject the whole document. Venue data is read from
    the regions returned by ``extract_venue_blocks`` instead.
    """
    return VENUE_CONTENT_RE.sub("", content)


class VenueResolver:
    """Link an event to its venue block, or to its raw LOCATION text."""

    def __init__(self, geocoder: Optional[Geocoder] = None) -> None:
        """Initialize venue resolver.

        Args:
            geocoder: Geocoding collaborator called on every resolved venue
        """
        self.geocoder = geocoder or NullGeocoder()

    @staticmethod
    def venue_uid(component: ICalEvent) -> Optional[str]:
        """Return the VVENUE parameter of the event's LOCATION property."""
        location = component.get("LOCATION")
        params = getattr(location, "params", None)
        if not params:
            return None
        return params.get("VVENUE") or None

    @staticmethod
    def find_block(uid: Optional[str], venue_blocks: Sequence[VenueBlock]) -> Optional[VenueBlock]:
        """Return the first block with the given UID."""
        if not uid:
            return None
        return next((block for block in venue_blocks if block.uid == uid), None)

    def resolve(
        self, component: ICalEvent, venue_blocks: Sequence[VenueBlock]
    ) -> Optional[DomainVenue]:
        """Build and geocode the venue for an event.

        Args:
            component: Parsed VEVENT component
            venue_blocks: Venue blocks extracted from the same document

        Returns:
            Geocoded venue, or None when the event has neither a venue block
            nor location text
        """
        block = self.find_block(self.venue_uid(component), venue_blocks)
        fields = block.vcard_fields() if block else None

        if fields is not None:
            venue = self._venue_from_vcard(fields)
        else:
            fallback = component.get("LOCATION")
            if fallback is None or not str(fallback).strip():
                return None
            venue = DomainVenue(title=str(fallback))

        return self.geocoder.geocode(venue)

    @staticmethod
    def _venue_from_vcard(fields: dict[str, str]) -> DomainVenue:
        attributes: dict[str, Optional[str]] = {}
        for key, attribute in VCARD_TEXT_FIELDS.items():
            value = fields.get(key)
            attributes[attribute] = str(vText.from_ical(value)) if value is not None else None

        latitude, longitude = parse_geo(fields.get("GEO"))
        return DomainVenue(**attributes, latitude=latitude, longitude=longitude)

"""Geocoding collaborator interface.

Geocoding itself happens outside the importer; the importer only calls the
collaborator once per resolved venue.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..ics.models import DomainVenue

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    """Protocol for venue geocoding services."""

    def geocode(self, venue: DomainVenue) -> DomainVenue:
        """Enrich a venue with coordinates.

        Implementations may fill in latitude and longitude or leave them
        unchanged. Failures are handled by the implementation.

        Args:
            venue: Venue to geocode

        Returns:
            The same venue, possibly enriched
        """
        ...


class NullGeocoder:
    """Geocoder that leaves venues untouched."""

    def geocode(self, venue: DomainVenue) -> DomainVenue:
        if not venue.has_coordinates:
            logger.debug("No geocoder configured; venue %r left without coordinates", venue.title)
        return venue

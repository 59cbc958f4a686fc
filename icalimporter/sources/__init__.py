"""Collaborators the importer talks to at its boundary."""

from .geocoding import Geocoder, NullGeocoder
from .store import EquivalenceLookup, InMemoryRecordStore

__all__ = [
    "EquivalenceLookup",
    "Geocoder",
    "InMemoryRecordStore",
    "NullGeocoder",
]

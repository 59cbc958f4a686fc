"""Import pipeline stages that work on parsed calendar data."""

from .dedup import Deduplicator
from .pipeline import CalendarImporter
from .staleness import StalenessFilter

__all__ = ["CalendarImporter", "Deduplicator", "StalenessFilter"]

"""icalimporter - import third-party iCalendar feeds, including VVENUE venue cards."""

__version__ = "1.0.0"
__author__ = "icalimporter Team"
__description__ = "Import iCalendar feeds into deduplicated event and venue records"

# Package metadata
__all__ = [
    "__author__",
    "__description__",
    "__version__",
]

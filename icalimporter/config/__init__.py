"""Configuration for the importer."""

from .settings import ImporterSettings, LoggingSettings, load_settings

__all__ = ["ImporterSettings", "LoggingSettings", "load_settings"]

"""Utility helpers."""

from .logging import VERBOSE, AutoColoredFormatter, get_log_level, get_logger, setup_logging

__all__ = ["VERBOSE", "AutoColoredFormatter", "get_log_level", "get_logger", "setup_logging"]

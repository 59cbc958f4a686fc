"""Command-line entry for icalimporter.

Fetches one calendar feed, runs the import pipeline and prints the resulting
events as JSON on stdout.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional

from pydantic import ValidationError

from .config.settings import load_settings
from .domain.pipeline import CalendarImporter
from .ics.exceptions import ICSError
from .ics.fetcher import ICSFetcher
from .ics.models import CalendarSource
from .utils.logging import get_logger, setup_logging

logger = get_logger("cli")


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the icalimporter CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="icalimporter",
        description="Import an iCalendar feed and print its events as JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m icalimporter webcal://example.com/events.ics
  python -m icalimporter https://example.com/events.ics --timezone America/New_York
        """,
    )

    parser.add_argument("url", help="Calendar URL (http, https or webcal)")
    parser.add_argument("--name", help="Source name attached to imported events (default: URL)")
    parser.add_argument("--config", metavar="PATH", help="YAML configuration file")
    parser.add_argument(
        "--timezone",
        metavar="TZ",
        help="IANA timezone for floating times (default: from config or ICALIMPORTER_DEFAULT_TIMEZONE)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Run the icalimporter CLI.

    Returns:
        Process exit code
    """
    args = _create_parser().parse_args(argv)

    try:
        settings = load_settings(args.config, default_timezone=args.timezone)
    except (ValidationError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    if args.log_level:
        settings.logging.console_level = args.log_level
    setup_logging(settings)

    source = CalendarSource(name=args.name or args.url, url=args.url)
    try:
        with ICSFetcher(settings) as fetcher:
            events = CalendarImporter(settings, fetcher=fetcher).import_source(source)
    except ICSError as e:
        logger.error(f"Import of {source.url} failed: {e.message}")
        return 1

    json.dump([event.model_dump(mode="json") for event in events], sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())

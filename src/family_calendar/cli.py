"""Command-line interface for Family Calendar.

This module provides the main entry point for the CLI application.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import structlog

from family_calendar import __version__
from family_calendar.config import get_settings
from family_calendar.events import JsonEventStore
from family_calendar.exceptions import FamilyCalendarError
from family_calendar.ics import IcsGenerator
from family_calendar.utils import configure_logging

logger = structlog.get_logger()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="family-calendar", description="Family event calendar export")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser("export", help="Write one event as an .ics calendar file")
    export_parser.add_argument("event_id", help="ID of the event to export")
    export_parser.add_argument(
        "--events",
        type=Path,
        default=None,
        help="Path to the JSON events file (default: settings events_path)",
    )
    export_parser.add_argument(
        "--tz",
        default=None,
        help="IANA timezone of the event (default: settings default_timezone)",
    )
    export_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="File to write (default: stdout)",
    )

    list_parser = subparsers.add_parser("list", help="List event ids in the events file")
    list_parser.add_argument(
        "--events",
        type=Path,
        default=None,
        help="Path to the JSON events file (default: settings events_path)",
    )

    return parser


def _cmd_export(args: argparse.Namespace) -> int:
    settings = get_settings()
    store = JsonEventStore(args.events or settings.events_path)
    timezone = args.tz or settings.default_timezone

    event = store.get(args.event_id)
    if event is None:
        print(f"Event not found: {args.event_id}", file=sys.stderr)
        return 1

    ics = IcsGenerator.from_settings(settings).generate(event, timezone)

    if args.output is None:
        # Bytes go straight to the buffer so CRLF is never translated.
        sys.stdout.flush()
        sys.stdout.buffer.write(ics.encode("utf-8"))
        sys.stdout.buffer.flush()
    else:
        try:
            args.output.write_bytes(ics.encode("utf-8"))
        except OSError as e:
            logger.error("calendar_write_failed", output=str(args.output), error=str(e))
            print(f"Could not write {args.output}: {e.strerror or e}", file=sys.stderr)
            return 1
        print(f"Wrote {event.title!r} to {args.output}")

    logger.info("calendar_exported", event_id=event.id, timezone=timezone, output=str(args.output or "-"))
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    settings = get_settings()
    store = JsonEventStore(args.events or settings.events_path)
    for event_id in store.ids():
        print(event_id)
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the Family Calendar CLI.

    Args:
        args: Command-line arguments. If None, uses sys.argv.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    if args is None:
        args = sys.argv[1:]

    settings = get_settings()
    configure_logging(settings)

    logger.debug("family_calendar_started", version=__version__, debug=settings.debug)

    parser = _build_parser()
    parsed = parser.parse_args(args)

    commands = {"export": _cmd_export, "list": _cmd_list}
    try:
        return commands[parsed.command](parsed)
    except FamilyCalendarError as e:
        logger.error("command_failed", command=parsed.command, error=str(e))
        print(f"Could not build calendar file: {e}" if parsed.command == "export" else str(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""Utility functions for Family Calendar."""

import logging
import sys

import structlog

from family_calendar.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog to drop events below ``settings.log_level``.

    Log lines go to stderr so command output on stdout stays clean.

    Args:
        settings: Application settings.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )

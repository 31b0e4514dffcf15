"""Unit tests for utility helpers."""

import logging

import structlog

from family_calendar.config import Settings
from family_calendar.utils import configure_logging


def test_configure_logging_uses_settings_level() -> None:
    configure_logging(Settings(log_level="warning"))

    assert structlog.get_config()["wrapper_class"] is structlog.make_filtering_bound_logger(logging.WARNING)


def test_configure_logging_falls_back_to_info() -> None:
    configure_logging(Settings(log_level="LOUD"))

    assert structlog.get_config()["wrapper_class"] is structlog.make_filtering_bound_logger(logging.INFO)

"""Custom exceptions for Family Calendar."""


class FamilyCalendarError(Exception):
    """Base exception for all Family Calendar errors."""


class ConfigurationError(FamilyCalendarError):
    """Exception raised for configuration related errors."""


class InvalidEventError(FamilyCalendarError, ValueError):
    """Exception raised when an event cannot be turned into a calendar file."""


class InvalidTimezoneError(InvalidEventError):
    """Exception raised for timezone names missing from the tz database."""

"""Configuration management for Family Calendar.

This module handles application configuration using Pydantic settings.
Configuration can be loaded from environment variables or .env files.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with
    the FAMILY_CALENDAR_ prefix (e.g., FAMILY_CALENDAR_PRODUCT_DOMAIN).
    """

    model_config = SettingsConfigDict(
        env_prefix="FAMILY_CALENDAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Calendar output
    product_name: str = Field(
        default="ChoreGami",
        description="Product name used in the PRODID of generated calendars",
    )
    product_domain: str = Field(
        default="choregami.app",
        description="Domain appended to event ids to build stable UIDs",
    )
    default_timezone: str = Field(
        default="UTC",
        description="IANA timezone used when a request does not name one",
    )

    # Event source
    events_path: Path = Field(
        default=Path("events.json"),
        description="Path to the JSON file holding exported family event rows",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()

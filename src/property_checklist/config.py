"""Runtime configuration using pydantic-settings."""

import logging
from datetime import date

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Settings loaded from environment variables.

    Scoring thresholds and weights are fixed tables in
    ``property_checklist.scoring.constants``; only ambient behaviour lives here.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROPERTY_CHECKLIST_",
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit structured JSON log lines instead of console output",
    )
    reference_date: date | None = Field(
        default=None,
        description="Pin 'today' for reproducible evaluations (ISO date); defaults to the real date",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and validate the log level name."""
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {v!r}")
        return level

    def get_log_level(self) -> int:
        """Return the stdlib numeric log level."""
        level: int = getattr(logging, self.log_level)
        return level

    def get_reference_date(self) -> date:
        """Return the pinned reference date, or today's date."""
        return self.reference_date or date.today()

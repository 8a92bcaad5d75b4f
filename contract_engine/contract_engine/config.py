"""Contract engine configuration loaded from environment variables."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables with LLMC_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="LLMC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = False

    # Logging
    log_level: str = "WARNING"
    structured_logging: bool = False

    # Telemetry
    metrics_file: Path | None = None

    # Verdict output
    verdict_indent: int = Field(default=2, ge=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> str:
        level = str(v).strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level '{v}'.")
        return level

    @property
    def effective_log_level(self) -> int:
        """Numeric log level; ``debug`` forces DEBUG."""
        if self.debug:
            return logging.DEBUG
        return logging.getLevelNamesMapping()[self.log_level]


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.info("Debug mode enabled; log level forced to DEBUG")

    return settings

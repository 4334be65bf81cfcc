"""Application configuration."""

import logging
import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from diet_tracker.domain.models import DEFAULT_DAILY_TARGET, FASTING_THRESHOLD
from diet_tracker.services.store import DEFAULT_STORAGE_KEY

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_path: Path = Path.home() / ".diet_tracker" / "storage.json"
    storage_key: str = DEFAULT_STORAGE_KEY
    default_daily_target: int = DEFAULT_DAILY_TARGET
    fasting_threshold: int = FASTING_THRESHOLD
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_log_level(raw: str | None) -> int:
    """Parse a log level name or number, defaulting to INFO."""
    if raw is None:
        return logging.INFO
    cleaned = raw.strip().upper()
    if cleaned.isdigit():
        return int(cleaned)
    level = logging.getLevelName(cleaned)
    if isinstance(level, int):
        return level
    return logging.INFO

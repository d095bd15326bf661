"""Runtime settings, read from ``BAKERY_*`` environment variables or ``.env``."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    # Storage
    DATA_DIR: Path = _DEFAULT_DATA_DIR

    # Logging
    LOG_LEVEL: str = "WARNING"

    # Admission control
    LOCK_TIMEOUT_SECONDS: float = 10.0

    # Seed data
    SEED_IMAGE_BASE: str = "public"

    model_config = SettingsConfigDict(
        env_prefix="BAKERY_",
        env_file=".env",
        extra="ignore",
    )


settings = Settings()

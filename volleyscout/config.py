"""
Platform configuration — environment-driven settings for all modules.
"""

import logging
from typing import Optional
from enum import Enum

from pydantic_settings import BaseSettings


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Central configuration for VolleyScout."""

    # ── App ──────────────────────────────────────────────
    APP_NAME: str = "VolleyScout"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: Environment = Environment.DEVELOPMENT
    DEBUG: bool = True

    # ── API ──────────────────────────────────────────────
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: list[str] = ["*"]

    # ── Storage ──────────────────────────────────────────
    SAVE_DIR: str = "./saves"
    SAVE_PREFIX: str = "volleyscout_save_"
    SNAPSHOT_FORMAT_VERSION: int = 1

    # ── Match ────────────────────────────────────────────
    HISTORY_LIMIT: int = 0  # 0 keeps every transition
    DEFAULT_HOME_NAME: str = "我方"
    DEFAULT_AWAY_NAME: str = "對方"

    # ── Logging ──────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the configured log format and level to the root logger."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=settings.LOG_FORMAT,
    )

"""
Configuration module for loading environment variables and settings.

This module handles:
1. Loading overrides from a .env file
2. Setting default retry, timeout and storage configuration

Provider API keys are deliberately not read from the environment; they live in
the settings store (see search_dispatch.settings).
"""

import os
from typing import Optional

from dotenv import load_dotenv

from search_dispatch.dispatch.retry import RetryPolicy

# Load environment variables from .env file
load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    try:
        return int(raw) if raw not in (None, "") else default
    except ValueError:
        return default


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    try:
        return float(raw) if raw not in (None, "") else default
    except ValueError:
        return default


class Config:
    """Configuration manager for dispatch settings."""

    DATA_DIR: str = os.getenv("SEARCH_DISPATCH_DATA_DIR", "./data")
    LOG_LEVEL: str = os.getenv("SEARCH_DISPATCH_LOG_LEVEL", "WARNING")

    # Retry policy
    MAX_ATTEMPTS: int = _env_int("SEARCH_MAX_ATTEMPTS", 3)
    BASE_DELAY_MS: int = _env_int("SEARCH_BASE_DELAY_MS", 1000)
    JITTER_MAX_MS: int = _env_int("SEARCH_JITTER_MAX_MS", 500)

    # Per-request HTTP timeout (seconds) and optional whole-dispatch deadline
    HTTP_TIMEOUT: float = _env_float("SEARCH_HTTP_TIMEOUT", 30.0) or 30.0
    DEADLINE_S: Optional[float] = _env_float("SEARCH_DEADLINE_S", None)

    @classmethod
    def retry_policy(cls) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=max(1, cls.MAX_ATTEMPTS),
            base_delay_ms=max(0, cls.BASE_DELAY_MS),
            jitter_max_ms=max(0, cls.JITTER_MAX_MS),
        )

    @classmethod
    def settings_db_path(cls) -> str:
        return os.path.join(cls.DATA_DIR, "settings.db")

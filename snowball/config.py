"""Application configuration read from the environment."""

from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv

from snowball.interest import DEFAULT_MAX_MONTHS

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class Settings:
    """Settings shared by the API and the logging setup."""

    APP_NAME = "Debt Snowball API"

    def __init__(self) -> None:
        self.MAX_PROJECTION_MONTHS = _env_int("SNOWBALL_MAX_PROJECTION_MONTHS", DEFAULT_MAX_MONTHS)
        self.LOG_LEVEL = os.getenv("SNOWBALL_LOG_LEVEL", "INFO").upper()
        self.DEV_MODE = _env_bool("SNOWBALL_DEV_MODE", default=True)
        self.LOG_JSON = _env_bool("SNOWBALL_LOG_JSON", default=False)
        if self.MAX_PROJECTION_MONTHS <= 0:
            raise ValueError("SNOWBALL_MAX_PROJECTION_MONTHS must be positive.")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

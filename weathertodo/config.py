"""Runtime configuration for weathertodo.

Values come from the environment (optionally seeded from a `.env` file).
Only the OpenWeather API key is required; everything else has a default.
"""

import os
from typing import Callable, Optional, TypeVar
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from weathertodo.database.database import DEFAULT_DATABASE_URL
from weathertodo.errors import ConfigError
from weathertodo.integrations.openweather import (
    DEFAULT_TIMEOUT_SEC,
    DEFAULT_UNITS,
    OPENWEATHER_API_BASE,
)

T = TypeVar("T")


class AppConfig(BaseModel):
    """Resolved application settings."""

    openweather_api_key: str = Field(..., description="OpenWeather API key")
    openweather_base_url: str = Field(OPENWEATHER_API_BASE, description="Current-weather endpoint")
    openweather_units: str = Field(DEFAULT_UNITS, description="Unit preference for weather lookups")
    weather_timeout_sec: float = Field(DEFAULT_TIMEOUT_SEC, description="HTTP timeout for weather lookups")
    database_url: str = Field(DEFAULT_DATABASE_URL, description="SQLAlchemy database URL")
    error_log_path: str = Field("error_log.txt", description="Append-only error log file")
    log_upload_delay_sec: float = Field(1.0, description="Simulated delay of the log upload")
    log_level: str = Field("WARNING", description="Level for diagnostic logging")
    debug: bool = Field(False, description="Echo SQL statements")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_number(name: str, default: T, cast: Callable[[str], T]) -> T:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


def load_config(env_file: Optional[str] = None) -> AppConfig:
    """Load configuration from the environment.

    Args:
        env_file: Optional path to a .env file. If None, python-dotenv searches
            from the current directory upwards.

    Raises:
        ConfigError: If OPENWEATHER_API_KEY is missing or a number is malformed
    """
    load_dotenv(env_file)

    api_key = _env("OPENWEATHER_API_KEY")
    if not api_key:
        raise ConfigError("OpenWeather API key is required. Set OPENWEATHER_API_KEY env var.")

    return AppConfig(
        openweather_api_key=api_key,
        openweather_base_url=_env("OPENWEATHER_BASE_URL", OPENWEATHER_API_BASE),
        openweather_units=_env("OPENWEATHER_UNITS", DEFAULT_UNITS),
        weather_timeout_sec=_env_number("WEATHER_TIMEOUT_SEC", DEFAULT_TIMEOUT_SEC, float),
        database_url=_env("DATABASE_URL", DEFAULT_DATABASE_URL),
        error_log_path=_env("ERROR_LOG_PATH", "error_log.txt"),
        log_upload_delay_sec=_env_number("LOG_UPLOAD_DELAY_SEC", 1.0, float),
        log_level=_env("LOG_LEVEL", "WARNING").upper(),
        debug=_env("DEBUG", "False").lower() == "true",
    )

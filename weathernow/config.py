"""Environment-driven application settings."""

import os
from functools import lru_cache

from pydantic import BaseModel

DEFAULT_WEATHER_API_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_GEOLOCATION_URL = "http://ip-api.com/json/"


class Settings(BaseModel):
    """Runtime configuration read from the process environment."""

    weather_api_key: str = ""
    weather_api_url: str = DEFAULT_WEATHER_API_URL
    geolocation_url: str = DEFAULT_GEOLOCATION_URL
    geolocation_enabled: bool = True
    log_level: str = "INFO"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@lru_cache
def get_settings() -> Settings:
    """Build settings from the environment.

    The API key is not validated here; a missing key only shows up as
    failed weather lookups.

    Returns:
        The cached Settings instance.
    """
    return Settings(
        weather_api_key=os.getenv("WEATHER_API_KEY", ""),
        weather_api_url=os.getenv("WEATHER_API_URL", DEFAULT_WEATHER_API_URL),
        geolocation_url=os.getenv("GEOLOCATION_URL", DEFAULT_GEOLOCATION_URL),
        geolocation_enabled=_env_flag("GEOLOCATION_ENABLED", "true"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )

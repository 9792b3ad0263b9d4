"""Environment driven settings for location lookups and forecast queries."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import FrozenSet, Optional


class ImproperlyConfigured(RuntimeError):
    """Raised when an environment variable holds an unusable value."""


PUBLIC_IP_URL = "https://api64.ipify.org?format=json"
IP_API_URL = "http://ip-api.com/json/{address}"
POSTCODES_URL = "https://api.postcodes.io/postcodes/{postal_code}"
OPEN_METEO_API_URL = "https://api.open-meteo.com/v1/forecast"

HOURLY_FLAGS = (
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation_probability",
    "precipitation",
    "rain",
    "showers",
    "snowfall",
    "weather_code",
    "visibility",
)


def env(name: str, default: Optional[str] = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    value = os.environ.get(name, default)
    if value is None:
        raise ImproperlyConfigured(f"Environment variable {name} is required")
    return value


def env_float(name: str, default: float) -> float:
    raw = env(name, str(default))
    try:
        return float(raw)
    except ValueError as exc:
        raise ImproperlyConfigured(f"{name} must be a number, got {raw!r}") from exc


def env_days(name: str, default: int) -> int:
    raw = env(name, str(default))
    try:
        value = int(raw)
    except ValueError as exc:
        raise ImproperlyConfigured(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ImproperlyConfigured(f"{name} must not be negative, got {value}")
    return value


def env_flags(name: str, default: str) -> FrozenSet[str]:
    raw = env(name, default)
    flags = frozenset(part.strip() for part in raw.split(",") if part.strip())
    unknown = sorted(flags.difference(HOURLY_FLAGS))
    if unknown:
        raise ImproperlyConfigured(f"{name} contains unknown flags: {', '.join(unknown)}")
    return flags


@dataclass
class ProviderSettings:
    public_ip_url: str = field(default_factory=lambda: env("METEO_WIZARD_PUBLIC_IP_URL", PUBLIC_IP_URL))
    ip_api_url: str = field(default_factory=lambda: env("METEO_WIZARD_IP_API_URL", IP_API_URL))
    postcodes_url: str = field(default_factory=lambda: env("METEO_WIZARD_POSTCODES_URL", POSTCODES_URL))
    timeout: float = field(default_factory=lambda: env_float("METEO_WIZARD_HTTP_TIMEOUT", 5.0))


@dataclass
class ForecastSettings:
    base_url: str = field(default_factory=lambda: env("METEO_WIZARD_FORECAST_URL", OPEN_METEO_API_URL))
    ground_level: str = field(default_factory=lambda: env("METEO_WIZARD_GROUND_LEVEL", "1"))
    hourly: FrozenSet[str] = field(
        default_factory=lambda: env_flags("METEO_WIZARD_HOURLY", ",".join(HOURLY_FLAGS))
    )
    forecast_days: int = field(default_factory=lambda: env_days("METEO_WIZARD_FORECAST_DAYS", 2))
    past_days: int = field(default_factory=lambda: env_days("METEO_WIZARD_PAST_DAYS", 2))


def log_level() -> str:
    return env("METEO_WIZARD_LOG_LEVEL", "INFO").upper()


__all__ = [
    "ForecastSettings",
    "HOURLY_FLAGS",
    "ImproperlyConfigured",
    "OPEN_METEO_API_URL",
    "ProviderSettings",
    "env",
    "log_level",
]

"""Rendering of Open-Meteo forecast query URLs."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .settings import HOURLY_FLAGS, OPEN_METEO_API_URL

if TYPE_CHECKING:
    from .entities import LocationRecord
    from .settings import ForecastSettings


logger = logging.getLogger(__name__)


class HourlyGroundLevel(Enum):
    """Height band of the hourly temperature series; the value is the query fragment."""

    UNSPECIFIED = ""
    TEMP_2M = "hourly=temperature_2m"
    TEMP_80M = "hourly=temperature_80m"
    TEMP_120M = "hourly=temperature_120m"
    TEMP_180M = "hourly=temperature_180m"

    @classmethod
    def from_code(cls, code: Optional[str]) -> "HourlyGroundLevel":
        """Parse a single character selector code.

        ``"1"`` to ``"4"`` select 2m, 80m, 120m and 180m. Anything else falls
        back to ``UNSPECIFIED`` without raising.
        """
        normalized = (code or "").strip()
        level = _GROUND_LEVEL_CODES.get(normalized)
        if level is None:
            if normalized:
                logger.debug("Unknown ground level code %r, leaving it unspecified", normalized)
            return cls.UNSPECIFIED
        return level


_GROUND_LEVEL_CODES = {
    "1": HourlyGroundLevel.TEMP_2M,
    "2": HourlyGroundLevel.TEMP_80M,
    "3": HourlyGroundLevel.TEMP_120M,
    "4": HourlyGroundLevel.TEMP_180M,
}


@dataclass(frozen=True)
class ForecastQueryConfig:
    latitude: float
    longitude: float
    ground_level: HourlyGroundLevel = HourlyGroundLevel.UNSPECIFIED
    relative_humidity_2m: bool = False
    apparent_temperature: bool = False
    precipitation_probability: bool = False
    precipitation: bool = False
    rain: bool = False
    showers: bool = False
    snowfall: bool = False
    weather_code: bool = False
    visibility: bool = False
    forecast_days: int = 0
    past_days: int = 0
    base_url: str = OPEN_METEO_API_URL

    def __post_init__(self) -> None:
        if self.forecast_days < 0:
            raise ValueError(f"forecast_days must not be negative, got {self.forecast_days}")
        if self.past_days < 0:
            raise ValueError(f"past_days must not be negative, got {self.past_days}")

    @classmethod
    def for_location(cls, location: "LocationRecord", settings: "ForecastSettings") -> "ForecastQueryConfig":
        flags = {name: name in settings.hourly for name in HOURLY_FLAGS}
        return cls(
            latitude=location.latitude,
            longitude=location.longitude,
            ground_level=HourlyGroundLevel.from_code(settings.ground_level),
            forecast_days=settings.forecast_days,
            past_days=settings.past_days,
            base_url=settings.base_url,
            **flags,
        )

    def with_latitude(self, latitude: float) -> "ForecastQueryConfig":
        return replace(self, latitude=latitude)

    def with_longitude(self, longitude: float) -> "ForecastQueryConfig":
        return replace(self, longitude=longitude)

    def with_forecast_days(self, forecast_days: int) -> "ForecastQueryConfig":
        return replace(self, forecast_days=forecast_days)

    def with_past_days(self, past_days: int) -> "ForecastQueryConfig":
        return replace(self, past_days=past_days)

    @property
    def active_flags(self) -> tuple:
        return tuple(name for name in HOURLY_FLAGS if getattr(self, name))

    def __str__(self) -> str:
        return render(self)


def render(config: ForecastQueryConfig, *, legacy_longitude: bool = False) -> str:
    """Build the forecast URL for ``config``.

    ``legacy_longitude`` reproduces the older ``&longitude&longitude=`` form
    for consumers that compare URLs byte for byte.
    """
    longitude_key = "longitude&longitude" if legacy_longitude else "longitude"
    parts = [
        f"{config.base_url}?latitude={config.latitude:.3f}&{longitude_key}={config.longitude:.3f}&",
        config.ground_level.value,
    ]
    parts.extend(f",{name}" for name in config.active_flags)
    if config.forecast_days != 0:
        parts.append(f"&forecast_days={config.forecast_days}")
    if config.past_days != 0:
        parts.append(f"&past_days={config.past_days}")
    return "".join(parts)


__all__ = ["ForecastQueryConfig", "HourlyGroundLevel", "render"]

"""Resolve the caller's location and build Open-Meteo forecast queries."""
from __future__ import annotations

from .entities import LocationRecord
from .query import ForecastQueryConfig, HourlyGroundLevel, render
from .services.location import (
    CannotParseAddress,
    CoordinateParseError,
    GeoLocationError,
    GeolocationProviderError,
    LocationService,
    build_location_service,
)

__version__ = "0.1.0"

__all__ = [
    "CannotParseAddress",
    "CoordinateParseError",
    "ForecastQueryConfig",
    "GeoLocationError",
    "GeolocationProviderError",
    "HourlyGroundLevel",
    "LocationRecord",
    "LocationService",
    "build_location_service",
    "render",
]

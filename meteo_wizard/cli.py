"""Command line entry point: locate the caller and print the forecast query."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Optional, Sequence

from .providers.postcodes import PostalCodeError
from .query import ForecastQueryConfig, render
from .services.location import GeoLocationError, LocationService, build_location_service
from .settings import ForecastSettings, ImproperlyConfigured, log_level


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="meteo-wizard",
        description="Resolve the current location and print an Open-Meteo forecast URL",
    )
    parser.add_argument("--postal-code", type=str, help="Locate by postal code instead of the public IP address")
    parser.add_argument("--ground-level", type=str, help="Hourly temperature height: 1=2m, 2=80m, 3=120m, 4=180m")
    parser.add_argument("--forecast-days", type=int, help="Number of forecast days, 0 to omit")
    parser.add_argument("--past-days", type=int, help="Number of past days, 0 to omit")
    parser.add_argument(
        "--legacy-longitude",
        action="store_true",
        help="Render the older URL form with a duplicated longitude token",
    )
    parser.add_argument("--log-level", type=str, help="Logging level (default from METEO_WIZARD_LOG_LEVEL)")
    return parser


def _forecast_settings(options: argparse.Namespace) -> ForecastSettings:
    settings = ForecastSettings()
    overrides = {}
    if options.ground_level is not None:
        overrides["ground_level"] = options.ground_level
    for name in ("forecast_days", "past_days"):
        value = getattr(options, name)
        if value is None:
            continue
        if value < 0:
            flag = "--" + name.replace("_", "-")
            raise ImproperlyConfigured(f"{flag} must not be negative, got {value}")
        overrides[name] = value
    return replace(settings, **overrides)


def main(argv: Optional[Sequence[str]] = None, service: Optional[LocationService] = None) -> int:
    options = build_parser().parse_args(argv)
    level = (options.log_level or log_level()).upper()
    if not isinstance(logging.getLevelName(level), int):
        sys.stderr.write(f"meteo-wizard: unknown log level {level!r}\n")
        return 2
    logging.basicConfig(level=level)

    try:
        settings = _forecast_settings(options)
        location_service = service or build_location_service()
    except ImproperlyConfigured as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    try:
        location = location_service.locate(postal_code=options.postal_code)
    except (GeoLocationError, PostalCodeError) as exc:
        logger.error("%s", exc)
        return 1

    config = ForecastQueryConfig.for_location(location, settings)
    payload = {
        "location": location.as_dict(),
        "url": render(config, legacy_longitude=options.legacy_longitude),
    }
    sys.stdout.write(json.dumps(payload) + "\n")
    return 0


__all__ = ["build_parser", "main"]

"""Location resolution from the public IP address or from a postal code."""
from __future__ import annotations

import logging
import re
from typing import Optional

from ..entities import LocationRecord
from ..providers.base import ProviderError, RequestConfig
from ..providers.ipapi import IpApiProvider
from ..providers.postcodes import PostalCodeError, PostcodesIoProvider
from ..providers.public_ip import PublicAddressResolver
from ..settings import ProviderSettings


logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class GeoLocationError(RuntimeError):
    """Raised when a location cannot be derived from a network address."""


class CannotParseAddress(GeoLocationError):
    def __init__(self) -> None:
        super().__init__("no public address available to locate")


class GeolocationProviderError(GeoLocationError):
    def __init__(self, cause: ProviderError) -> None:
        super().__init__(f"cannot obtain location from geolocation provider: {cause}")
        self.cause = cause


class CoordinateParseError(GeoLocationError):
    def __init__(self, raw_value: str, target_type: str) -> None:
        super().__init__(f"cannot parse {raw_value!r} to {target_type}")
        self.raw_value = raw_value
        self.target_type = target_type


def _parse_coordinate(raw_value: str, name: str) -> float:
    # plain decimal text only: no "1_2", padding, nan or inf
    if not isinstance(raw_value, str) or not _DECIMAL.fullmatch(raw_value):
        logger.error("Cannot parse %s %r to a float value", name, raw_value)
        raise CoordinateParseError(raw_value, "float")
    return float(raw_value)


class IpLocationResolver:
    """Turns a network address into a :class:`LocationRecord` via ip-api.com."""

    def __init__(self, provider: IpApiProvider) -> None:
        self.provider = provider

    def resolve(self, address: Optional[str]) -> LocationRecord:
        if not address:
            raise CannotParseAddress()
        try:
            location = self.provider.locate(address)
        except ProviderError as exc:
            logger.error("Geolocation lookup failed for %s: %s", address, exc)
            raise GeolocationProviderError(exc) from exc
        latitude = _parse_coordinate(location.latitude, "latitude")
        longitude = _parse_coordinate(location.longitude, "longitude")
        return LocationRecord(
            latitude=latitude,
            longitude=longitude,
            address=address,
            region=location.region,
        )


class PostalCodeResolver:
    """Turns a postal code into a :class:`LocationRecord`.

    The public address is looked up only to record where the request came from;
    failing to find it leaves ``address`` empty. Lookup errors from the postal
    code provider are re-raised untouched.
    """

    def __init__(self, provider: PostcodesIoProvider, address_resolver: PublicAddressResolver) -> None:
        self.provider = provider
        self.address_resolver = address_resolver

    def resolve(self, postal_code: str) -> LocationRecord:
        try:
            location = self.provider.lookup(postal_code)
        except PostalCodeError:
            logger.error("Cannot get location from postal code %r", postal_code)
            raise
        address = self.address_resolver.acquire() or ""
        return LocationRecord(
            latitude=location.latitude,
            longitude=location.longitude,
            address=address,
            postal_code=postal_code,
            region=location.region,
        )


class LocationService:
    def __init__(
        self,
        *,
        address_resolver: PublicAddressResolver,
        ip_resolver: IpLocationResolver,
        postal_code_resolver: PostalCodeResolver,
    ) -> None:
        self.address_resolver = address_resolver
        self.ip_resolver = ip_resolver
        self.postal_code_resolver = postal_code_resolver

    def locate_from_public_ip(self) -> LocationRecord:
        address = self.address_resolver.acquire()
        if address is None:
            logger.error("Failed to discover the public address")
            raise CannotParseAddress()
        location = self.ip_resolver.resolve(address)
        logger.info("Located %s in %s", address, location.region or "unknown region")
        return location

    def locate_from_postal_code(self, postal_code: str) -> LocationRecord:
        location = self.postal_code_resolver.resolve(postal_code)
        logger.info("Located postal code %s in %s", postal_code, location.region or "unknown region")
        return location

    def locate(self, postal_code: Optional[str] = None) -> LocationRecord:
        if postal_code is not None:
            return self.locate_from_postal_code(postal_code)
        return self.locate_from_public_ip()


def build_location_service(settings: Optional[ProviderSettings] = None) -> LocationService:
    settings = settings or ProviderSettings()
    request_config = RequestConfig(timeout=settings.timeout)
    address_resolver = PublicAddressResolver(base_url=settings.public_ip_url, request_config=request_config)
    ip_provider = IpApiProvider(
        base_url=settings.ip_api_url,
        session=address_resolver.session,
        request_config=request_config,
    )
    postcode_provider = PostcodesIoProvider(
        base_url=settings.postcodes_url,
        session=address_resolver.session,
        request_config=request_config,
    )
    return LocationService(
        address_resolver=address_resolver,
        ip_resolver=IpLocationResolver(ip_provider),
        postal_code_resolver=PostalCodeResolver(postcode_provider, address_resolver),
    )


__all__ = [
    "CannotParseAddress",
    "CoordinateParseError",
    "GeoLocationError",
    "GeolocationProviderError",
    "IpLocationResolver",
    "LocationService",
    "PostalCodeResolver",
    "build_location_service",
]

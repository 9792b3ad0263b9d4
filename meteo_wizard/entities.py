from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict


@dataclass(frozen=True)
class LocationRecord:
    """Resolved coordinates together with where they came from.

    Coordinates are stored exactly as parsed from the provider; no range
    checks are applied. ``address`` is the public network address used for the
    lookup (empty when it could not be discovered), ``postal_code`` is only set
    for postal code lookups and ``region`` is whatever the provider reported.
    """

    latitude: float
    longitude: float
    address: str = ""
    postal_code: str = ""
    region: str = ""

    def with_latitude(self, latitude: float) -> "LocationRecord":
        return replace(self, latitude=latitude)

    def with_longitude(self, longitude: float) -> "LocationRecord":
        return replace(self, longitude=longitude)

    def with_address(self, address: str) -> "LocationRecord":
        return replace(self, address=address)

    def with_postal_code(self, postal_code: str) -> "LocationRecord":
        return replace(self, postal_code=postal_code)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["LocationRecord"]

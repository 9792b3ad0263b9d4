from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .base import HttpProvider, ProviderError
from ..settings import IP_API_URL


@dataclass(frozen=True)
class IpLocation:
    """Raw ip-api.com answer; coordinates are kept as text until resolved."""

    latitude: str
    longitude: str
    region: str


class IpApiProvider(HttpProvider):
    base_url = IP_API_URL

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url
        self._log = logging.getLogger(self.__class__.__name__)

    def locate(self, address: str) -> IpLocation:
        url = self.base_url.format(address=address)
        response = self._request("GET", url, params={"fields": "status,message,lat,lon,regionName"})
        data = self._json(response)
        if not isinstance(data, dict):
            raise ProviderError("unexpected response body")
        if data.get("status") != "success":
            message = data.get("message") or "unknown error"
            self._log.error("ip-api lookup for %s failed: %s", address, message)
            raise ProviderError(f"lookup failed: {message}")
        return IpLocation(
            latitude=_as_text(data.get("lat")),
            longitude=_as_text(data.get("lon")),
            region=_as_text(data.get("regionName")),
        )


def _as_text(value: Optional[object]) -> str:
    if value is None:
        return ""
    return str(value)


__all__ = ["IpApiProvider", "IpLocation"]

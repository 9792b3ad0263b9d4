from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from .base import HttpProvider, ProviderError
from ..settings import POSTCODES_URL


class PostalCodeError(ProviderError):
    """Base error for postal code lookups."""

    def __init__(self, postal_code: str, message: str) -> None:
        super().__init__(message)
        self.postal_code = postal_code


class PostcodeNotFound(PostalCodeError):
    def __init__(self, postal_code: str) -> None:
        super().__init__(postal_code, f"postal code {postal_code!r} not found")


class PostcodeLookupFailed(PostalCodeError):
    def __init__(self, postal_code: str, cause: Exception) -> None:
        super().__init__(postal_code, f"lookup of postal code {postal_code!r} failed: {cause}")
        self.cause = cause


@dataclass(frozen=True)
class PostcodeLocation:
    latitude: float
    longitude: float
    region: str


class PostcodesIoProvider(HttpProvider):
    """Postal code to coordinates lookup backed by postcodes.io."""

    base_url = POSTCODES_URL

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url
        self._log = logging.getLogger(self.__class__.__name__)

    def lookup(self, postal_code: str) -> PostcodeLocation:
        code = postal_code.strip()
        if not code:
            raise PostcodeNotFound(postal_code)
        url = self.base_url.format(postal_code=quote(code, safe=""))
        try:
            response = self._request("GET", url)
        except ProviderError as exc:
            if exc.status_code == 404:
                raise PostcodeNotFound(postal_code) from exc
            raise PostcodeLookupFailed(postal_code, exc) from exc
        try:
            data = self._json(response)
            result = data["result"]
            return PostcodeLocation(
                latitude=float(result["latitude"]),
                longitude=float(result["longitude"]),
                region=result.get("region") or "",
            )
        except (ProviderError, KeyError, TypeError, ValueError, AttributeError) as exc:
            self._log.error("Unexpected postcodes.io payload for %s", postal_code, exc_info=exc)
            raise PostcodeLookupFailed(postal_code, exc) from exc


__all__ = [
    "PostalCodeError",
    "PostcodeLocation",
    "PostcodeLookupFailed",
    "PostcodeNotFound",
    "PostcodesIoProvider",
]

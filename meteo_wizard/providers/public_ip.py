from __future__ import annotations

import ipaddress
import logging
from typing import Optional

from .base import HttpProvider, ProviderError
from ..settings import PUBLIC_IP_URL


class PublicAddressResolver(HttpProvider):
    """Discovers the caller's public IPv4/IPv6 address."""

    base_url = PUBLIC_IP_URL

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url
        self._log = logging.getLogger(self.__class__.__name__)

    def acquire(self) -> Optional[str]:
        """Return the public address, or ``None`` when it cannot be discovered."""
        try:
            response = self._request("GET", self.base_url)
            data = self._json(response)
        except ProviderError as exc:
            self._log.warning("Public address lookup failed: %s", exc)
            return None
        raw = data.get("ip") if isinstance(data, dict) else None
        if not raw:
            self._log.warning("Public address missing from response")
            return None
        try:
            return str(ipaddress.ip_address(str(raw).strip()))
        except ValueError:
            self._log.warning("Public address %r is not a valid IP address", raw)
            return None


__all__ = ["PublicAddressResolver"]

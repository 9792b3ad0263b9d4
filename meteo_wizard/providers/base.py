from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import Response


class ProviderError(RuntimeError):
    """A lookup service could not be reached or answered with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class QuotaExceeded(ProviderError):
    """The lookup service rate limited us (HTTP 429)."""


@dataclass
class RequestConfig:
    timeout: float = 5.0


class HttpProvider:
    """Common plumbing for the address, geolocation and postal code lookups.

    Every lookup is a single request; there is no retry. Transport failures and
    error statuses surface as :class:`ProviderError`.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(method, url, timeout=self.request_config.timeout, **kwargs)
        except requests.Timeout as exc:
            self._log.error("%s %s timed out after %ss", method, url, self.request_config.timeout)
            raise ProviderError("timeout") from exc
        except requests.RequestException as exc:
            self._log.error("%s %s could not be sent: %s", method, url, exc)
            raise ProviderError("request failed") from exc
        return self._check_status(response)

    def _check_status(self, response: Response) -> Response:
        status = response.status_code
        if status == 429:
            self._log.warning("Rate limited by %s", response.url)
            raise QuotaExceeded("quota exceeded", status_code=status)
        if status >= 400:
            self._log.error("%s answered %s: %s", response.url, status, response.text[:200])
            raise ProviderError(f"HTTP {status}", status_code=status)
        return response

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("%s did not return JSON", response.url)
            raise ProviderError("invalid json") from exc


__all__ = ["HttpProvider", "ProviderError", "QuotaExceeded", "RequestConfig"]

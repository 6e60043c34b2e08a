"""Shared HTTP transport utilities for REST adapters.

A thin wrapper around ``requests.Session`` so adapters share the timeout
policy, optional transport retries, and API-key header construction.

Dependencies:
    - ``requests`` for network I/O.
    - ``ota_updater.adapters.api_errors.ApiTimeoutError`` for typed transport
      failures.

Call context:
    Constructed by ``UpdateCheckRestAdapter``; use cases only ever talk to
    ports.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from ota_updater.adapters.api_errors import ApiTimeoutError

_log = logging.getLogger(__name__)


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Timeout in seconds for JSON API calls.
        retries: Transport retries after the initial attempt. Queries are not
            retried by the application, so the default is ``0``.
    """
    request_timeout_s: int = 10
    retries: int = 0


class RetryingSession:
    """``requests`` wrapper adding headers and a bounded attempt loop.

    Transport-only: callers provide URLs and map non-2xx responses themselves.
    """

    def __init__(self, api_key: Optional[str], cfg: HttpConfig) -> None:
        self.session = requests.Session()
        self.api_key = api_key
        self.cfg = cfg

    def _headers(self, accept: str = "application/json", json_body: bool = False) -> Dict[str, str]:
        headers = {"Accept": accept}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _attempts(self) -> int:
        return max(0, int(self.cfg.retries)) + 1

    def post(
        self,
        url: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a JSON POST request.

        Raises:
            ApiTimeoutError: If every attempt fails with a timeout or
                connection error.
        """
        context = f"POST {url}"
        data = None if json_body is None else json.dumps(json_body)
        last_err: ApiTimeoutError | None = None
        for attempt in range(self._attempts()):
            try:
                return self.session.post(
                    url,
                    data=data,
                    headers=self._headers(json_body=json_body is not None),
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError) as exc:
                _log.debug("%s failed (attempt %d): %s", context, attempt + 1, exc)
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
        raise last_err


__all__ = ["HttpConfig", "RetryingSession"]

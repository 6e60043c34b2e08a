"""REST adapter implementing the update-check port over a JSON gateway."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ota_updater.domain.ports import UpdateQueryPort
from ota_updater.domain.query_models import QueryRequest, QuerySuccess

from ota_updater.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    build_error_message,
    extract_error_code,
    extract_error_hint,
    parse_error_payload,
)
from ota_updater.adapters.http_client import HttpConfig, RetryingSession

QUERY_PATH = "/update/query"


class UpdateCheckRestAdapter(UpdateQueryPort):
    """HTTP adapter posting query requests to ``<endpoint>/update/query``.

    The gateway answers HTTP 2xx with ``{"responseCode", "errMsg", "body"}``
    for every completed query, including 304/no-update and service-level
    errors. HTTP-level failures raise typed ``ApiError`` subclasses.
    """

    def __init__(
        self,
        endpoint_url: str,
        *,
        api_key: Optional[str] = None,
        request_timeout_s: int = 10,
        retries: int = 0,
    ) -> None:
        if not (endpoint_url or "").strip():
            raise ValueError("UpdateCheckRestAdapter requires an endpoint URL")
        self._log = logging.getLogger(__name__)
        self.endpoint_url = endpoint_url.strip().rstrip("/")
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = RetryingSession(api_key or None, self.cfg)

    def query_update(self, request: QueryRequest) -> QuerySuccess:
        """POST one query and return the typed service response."""
        url = f"{self.endpoint_url}{QUERY_PATH}"
        payload = request.to_payload()
        self._log.debug("POST %s region=%s mode=%s", url, request.region, request.req_mode)
        resp = self.session.post(url, json_body=payload, timeout=self.cfg.request_timeout_s)
        self._ensure_ok(resp, f"query_update[{request.region}]")
        try:
            return QuerySuccess.from_payload(self._json_dict(resp))
        except ValueError as exc:
            raise RuntimeError(f"Invalid query response: {exc}") from exc

    # ------------------------------------------------------------------
    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        """Raise typed adapter errors for non-2xx responses."""
        if 200 <= resp.status_code < 300:
            return
        status = resp.status_code
        payload = parse_error_payload(resp)
        message = build_error_message(ctx, status, payload)
        if 400 <= status < 500:
            raise ApiClientError(
                message,
                status=status,
                code=extract_error_code(payload),
                hint=extract_error_hint(payload),
                payload=payload,
                context=ctx,
            )
        if 500 <= status < 600:
            raise ApiServerError(message, status=status, payload=payload, context=ctx)
        raise ApiError(message, status=status, payload=payload, context=ctx)

    @staticmethod
    def _json_dict(resp: requests.Response) -> Dict[str, Any]:
        """Parse response JSON and require an object payload."""
        try:
            payload = resp.json()
        except Exception:
            snippet = getattr(resp, "text", "")[:400]
            raise RuntimeError(f"Invalid JSON response: {snippet}")
        if not isinstance(payload, dict):
            raise RuntimeError("Invalid JSON response shape: expected object")
        return dict(payload)


__all__ = ["QUERY_PATH", "UpdateCheckRestAdapter"]

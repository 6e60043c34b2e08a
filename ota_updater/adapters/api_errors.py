"""Typed failures raised by HTTP adapters and helpers to read error payloads.

Use cases never see ``requests`` exceptions: adapters translate non-2xx
responses and transport problems into this hierarchy, and
``ota_updater.usecases.error_mapping`` turns them into user-facing text.

The update gateway reports problems as ``{"responseCode", "errMsg"}``; the
helpers below also accept the generic ``message``/``detail`` shapes that
proxies in front of it tend to return.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

_MESSAGE_KEYS = ("errMsg", "message", "detail", "error")
_CODE_KEYS = ("errCode", "code", "error_code", "responseCode")
_HINT_KEYS = ("hint", "details", "errors")
_SNIPPET_LEN = 400


class ApiError(RuntimeError):
    """Base class for update-service adapter failures.

    Attributes:
        status: HTTP status, when the failure came from a response.
        code: Service error code read from the payload.
        hint: Short human-readable detail for the user.
        payload: Decoded JSON body (or a text snippet) of the response.
        context: ``"<operation>[<region>]"`` or ``"POST <url>"`` for logs.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.hint = hint
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the update gateway (bad request, auth, throttling)."""


class ApiServerError(ApiError):
    """HTTP 5xx from the update gateway."""


class ApiTimeoutError(ApiError):
    """No response: timeout or connection failure after every attempt."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


def parse_error_payload(resp: Any) -> Any:
    """Return the decoded error body, a text snippet, or ``None``; never raises."""
    try:
        return resp.json()
    except Exception:
        return (getattr(resp, "text", "") or "")[:_SNIPPET_LEN] or None


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    detail = first_string(payload)
    return f"{ctx}: {detail} (HTTP {status})" if detail else f"{ctx}: HTTP {status}"


def extract_error_code(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    value = _first_present(payload, _CODE_KEYS)
    return None if value is None else str(value)


def extract_error_hint(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        for key in _HINT_KEYS:
            text = stringify(payload.get(key))
            if text:
                return text
        return None
    if isinstance(payload, (list, str)):
        return stringify(payload)
    return None


def first_string(payload: Any) -> Optional[str]:
    """Return the first non-blank message found in a (possibly nested) payload."""
    if isinstance(payload, str):
        return payload.strip() or None
    if isinstance(payload, dict):
        candidates: Iterable[Any] = (payload.get(key) for key in _MESSAGE_KEYS)
    elif isinstance(payload, list):
        candidates = payload
    else:
        return None
    for candidate in candidates:
        if isinstance(candidate, (str, dict, list)):
            text = first_string(candidate)
            if text:
                return text
    return None


def stringify(data: Any, *, limit: int = 200) -> Optional[str]:
    """Flatten nested error details into one short line."""
    if data is None:
        return None
    if isinstance(data, list):
        parts = [text for text in (stringify(item, limit=limit) for item in data) if text][:3]
        text = "; ".join(parts)
    elif isinstance(data, dict):
        pairs = []
        for key, value in list(data.items())[:4]:
            value_text = stringify(value, limit=limit)
            if value_text:
                pairs.append(f"{key}={value_text}")
        text = ", ".join(pairs)
    else:
        text = str(data).strip()
    return text[:limit] or None


def _first_present(payload: dict, keys: Iterable[str]) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None

"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations


from typing import Optional

from ota_updater.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    extract_error_hint,
)
from ota_updater.domain.ports import UseCaseError


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Exception raised by a port call.
        default_code: Code used for exceptions outside the adapter hierarchy.
        default_message: Message used for such exceptions; falls back to
            ``str(exc)`` and then to the exception class name.

    Returns:
        UseCaseError carrying a non-empty, user-presentable message.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, ApiClientError):
        status = exc.status or 0
        hint = exc.hint or extract_error_hint(getattr(exc, "payload", None))
        if status in (401, 403):
            return UseCaseError("AUTH_FAILED", "Auth failed / API key invalid.")
        if status == 429:
            return UseCaseError("RATE_LIMITED", "Too many requests, try again later.")
        label = f"Request failed (HTTP {status})" if status else "Request failed"
        return UseCaseError("REQUEST_FAILED", _compose_error_message(label, hint))
    if isinstance(exc, ApiServerError):
        return UseCaseError("SERVER_ERROR", "Update server error, try again.")
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc) or "Update service error.")

    message = default_message or str(exc) or exc.__class__.__name__
    return UseCaseError(default_code, message)


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    """Compose a user-facing error message with optional hint text."""
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_api_error"]

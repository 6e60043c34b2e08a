"""Map a finished query outcome to exactly one user notification."""

from __future__ import annotations

from ota_updater.domain.query_models import Notification, QueryFailure, QueryOutcome, QuerySuccess

MSG_QUERY_SUCCESS = "Query succeeded."
MSG_NO_UPDATE_AVAILABLE = "No update available."
MSG_QUERY_FAILED = "Query failed."


def classify_outcome(outcome: QueryOutcome) -> Notification:
    """Return the notification text for ``outcome``.

    Failures surface their own message; 200 and 304 map to fixed messages;
    any other response code is shown verbatim with the service's ``errMsg``.
    """
    if isinstance(outcome, QueryFailure):
        return (outcome.message or "").strip() or MSG_QUERY_FAILED
    if not isinstance(outcome, QuerySuccess):
        raise TypeError(f"classify_outcome expects a query outcome, got {type(outcome).__name__}")
    if outcome.response_code == 200:
        return MSG_QUERY_SUCCESS
    if outcome.response_code == 304:
        return MSG_NO_UPDATE_AVAILABLE
    return f"code: {outcome.response_code}, {outcome.err_msg}"


__all__ = [
    "MSG_NO_UPDATE_AVAILABLE",
    "MSG_QUERY_FAILED",
    "MSG_QUERY_SUCCESS",
    "classify_outcome",
]

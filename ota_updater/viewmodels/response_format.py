"""Display helpers turning query outcomes into label/value rows.

Call context:
    ``QueryVM.response_rows`` feeds these rows to the response table of
    ``QueryWindowView``.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ..domain.query_models import QueryFailure, QueryOutcome

ResponseRow = Tuple[str, str]

_MAX_VALUE_LEN = 160


def outcome_rows(outcome: Optional[QueryOutcome]) -> List[ResponseRow]:
    """Return rows for ``outcome``: ``responseCode``/``errMsg`` first, then the body."""
    if outcome is None:
        return []
    if isinstance(outcome, QueryFailure):
        return [("error", outcome.message), ("code", outcome.code)]
    rows: List[ResponseRow] = [("responseCode", str(outcome.response_code))]
    if outcome.err_msg:
        rows.append(("errMsg", outcome.err_msg))
    rows.extend(flatten(outcome.body))
    return rows


def flatten(data: Any, prefix: str = "") -> List[ResponseRow]:
    """Flatten nested mappings/lists into dotted keys (``components.0.size``)."""
    if isinstance(data, dict):
        rows: List[ResponseRow] = []
        for key, value in data.items():
            rows.extend(flatten(value, f"{prefix}.{key}" if prefix else str(key)))
        return rows
    if isinstance(data, (list, tuple)):
        rows = []
        for index, value in enumerate(data):
            rows.extend(flatten(value, f"{prefix}.{index}" if prefix else str(index)))
        return rows
    return [(prefix, _short(data))]


def _short(value: Any) -> str:
    text = "" if value is None else str(value)
    if len(text) > _MAX_VALUE_LEN:
        return text[: _MAX_VALUE_LEN - 1] + "…"
    return text


__all__ = ["ResponseRow", "flatten", "outcome_rows"]

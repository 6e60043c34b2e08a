from __future__ import annotations

from ota_updater.domain.query_models import QueryFailure, QuerySuccess
from ota_updater.viewmodels.response_format import flatten, outcome_rows


def test_no_outcome_has_no_rows() -> None:
    assert outcome_rows(None) == []


def test_failure_rows() -> None:
    rows = outcome_rows(QueryFailure(message="Request timed out.", code="REQUEST_TIMEOUT"))

    assert rows == [("error", "Request timed out."), ("code", "REQUEST_TIMEOUT")]


def test_success_rows_start_with_code_and_message() -> None:
    outcome = QuerySuccess(
        response_code=200,
        body={
            "realOtaVersion": "X_2",
            "components": [{"componentPackets": {"size": 42}}],
        },
    )

    assert outcome_rows(outcome) == [
        ("responseCode", "200"),
        ("realOtaVersion", "X_2"),
        ("components.0.componentPackets.size", "42"),
    ]


def test_err_msg_row_only_when_present() -> None:
    rows = outcome_rows(QuerySuccess(response_code=304, err_msg="no modify"))

    assert rows == [("responseCode", "304"), ("errMsg", "no modify")]


def test_long_values_are_shortened() -> None:
    (row,) = flatten({"url": "x" * 500})

    assert len(row[1]) == 160
    assert row[1].endswith("…")


def test_none_value_renders_blank() -> None:
    assert flatten({"patch": None}) == [("patch", "")]

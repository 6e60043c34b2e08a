from __future__ import annotations

import pytest

from ota_updater.domain.query_models import QuerySuccess


def test_from_payload_reads_code_message_and_body() -> None:
    response = QuerySuccess.from_payload(
        {"responseCode": 200, "errMsg": "", "body": {"realOtaVersion": "X_1"}}
    )

    assert response.response_code == 200
    assert response.err_msg == ""
    assert response.body == {"realOtaVersion": "X_1"}


def test_from_payload_accepts_string_code() -> None:
    response = QuerySuccess.from_payload({"responseCode": " 304 ", "errMsg": "no modify"})

    assert response.response_code == 304
    assert response.err_msg == "no modify"
    assert response.body == {}


def test_from_payload_ignores_non_mapping_body() -> None:
    response = QuerySuccess.from_payload({"responseCode": 500, "body": "encrypted"})

    assert response.body == {}


def test_from_payload_requires_response_code() -> None:
    with pytest.raises(ValueError, match="Missing responseCode"):
        QuerySuccess.from_payload({"errMsg": "oops"})


def test_from_payload_rejects_non_numeric_code() -> None:
    with pytest.raises(ValueError, match="Invalid responseCode"):
        QuerySuccess.from_payload({"responseCode": "ok"})

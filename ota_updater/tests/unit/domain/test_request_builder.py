from __future__ import annotations

import pytest

from ota_updater.domain.query_models import QueryParameters, query_mode_token
from ota_updater.domain.request_builder import build_query_request


def _params(**overrides) -> QueryParameters:
    base = dict(
        ota_version="ABC123_14_X",
        model="ABC123",
        carrier="10010111",
        guid="",
        region="CN",
        gray=False,
        mode="MANUAL",
    )
    base.update(overrides)
    return QueryParameters(**base)


def test_blank_guid_is_omitted() -> None:
    request = build_query_request(_params(guid="   "))

    assert request.guid is None
    assert "guid" not in request.to_payload()


def test_guid_is_sent_verbatim() -> None:
    request = build_query_request(_params(guid=" abc-123 "))

    assert request.guid == " abc-123 "
    assert request.to_payload()["guid"] == " abc-123 "


def test_gray_only_sent_for_china_with_flag() -> None:
    assert build_query_request(_params(region="CN", gray=True)).gray == 1
    assert build_query_request(_params(region="CN", gray=False)).gray is None
    assert build_query_request(_params(region="EU", gray=True)).gray is None


def test_gray_flag_outside_china_stays_out_of_payload() -> None:
    payload = build_query_request(_params(region="IN", gray=True)).to_payload()

    assert "gray" not in payload


def test_request_carries_lowercase_mode_token() -> None:
    request = build_query_request(_params(mode="CLIENT_AUTO"))

    assert request.req_mode == "client_auto"


def test_payload_uses_wire_keys() -> None:
    payload = build_query_request(_params(region="CN", gray=True, guid="g-1")).to_payload()

    assert payload == {
        "otaVersion": "ABC123_14_X",
        "region": "CN",
        "model": "ABC123",
        "nvCarrier": "10010111",
        "reqMode": "manual",
        "guid": "g-1",
        "gray": 1,
    }


def test_builder_does_not_mutate_parameters() -> None:
    params = _params(guid="g-1")
    snapshot = QueryParameters(**vars(params))

    build_query_request(params)

    assert params == snapshot


@pytest.mark.parametrize(
    ("mode", "token"),
    [("MANUAL", "manual"), ("SERVER_AUTO", "server_auto"), ("TASTE", "taste")],
)
def test_query_mode_token(mode: str, token: str) -> None:
    assert query_mode_token(mode) == token


def test_query_mode_token_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError):
        query_mode_token("NIGHTLY")

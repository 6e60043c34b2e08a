from __future__ import annotations

from ota_updater.adapters.update_check_mock import UpdateCheckMock
from ota_updater.domain.query_models import QueryRequest


def _request(version: str) -> QueryRequest:
    return QueryRequest(
        ota_version=version,
        region="CN",
        model="PHZ110",
        carrier="10010111",
        req_mode="manual",
    )


def test_older_version_gets_update_body() -> None:
    mock = UpdateCheckMock(latest_ota_version="PHZ110_11.A.02")

    result = mock.query_update(_request("PHZ110_11.A.01"))

    assert result.response_code == 200
    assert result.body["realOtaVersion"] == "PHZ110_11.A.02"
    assert result.body["components"][0]["componentPackets"]["manualUrl"].endswith("PHZ110.zip")


def test_latest_version_gets_not_modified() -> None:
    mock = UpdateCheckMock(latest_ota_version="PHZ110_11.A.02")

    result = mock.query_update(_request("PHZ110_11.A.02"))

    assert result.response_code == 304
    assert result.err_msg == "no modify"
    assert result.body == {}


def test_requests_are_recorded() -> None:
    mock = UpdateCheckMock()
    request = _request("X_1")

    mock.query_update(request)

    assert mock.requests == [request]

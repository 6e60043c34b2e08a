from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ota_updater.domain.ports import UpdateQueryPort
from ota_updater.domain.query_models import QueryRequest, QuerySuccess


@dataclass
class UpdateCheckMock(UpdateQueryPort):
    """Offline substitute for ``UpdateCheckRestAdapter`` with deterministic responses.

    A request whose ``ota_version`` already equals ``latest_ota_version``
    gets ``304``; anything else gets ``200`` with a one-component body.
    """

    latest_ota_version: str = "PHZ110_11.A.01_0010_202401010000"
    latency_s: float = 0.0
    requests: List[QueryRequest] = field(default_factory=list)

    def query_update(self, request: QueryRequest) -> QuerySuccess:
        self.requests.append(request)
        if self.latency_s > 0:
            time.sleep(self.latency_s)
        if request.ota_version == self.latest_ota_version:
            return QuerySuccess(response_code=304, err_msg="no modify")
        return QuerySuccess(response_code=200, body=self._body_for(request))

    def _body_for(self, request: QueryRequest) -> Dict[str, Any]:
        return {
            "realOtaVersion": self.latest_ota_version,
            "realAndroidVersion": "Android14",
            "securityPatch": "2024-01-01",
            "components": [
                {
                    "componentName": "my_manifest",
                    "componentVersion": self.latest_ota_version,
                    "componentPackets": {
                        "manualUrl": f"https://example.invalid/{request.model or 'device'}.zip",
                        "size": "5368709120",
                    },
                }
            ],
        }


__all__ = ["UpdateCheckMock"]

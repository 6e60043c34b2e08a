"""Typed domain objects for OTA update queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Optional, Tuple, Union


Region = Literal["CN", "EU", "IN", "SG", "RU", "TR", "TH", "GL"]
QueryMode = Literal["MANUAL", "CLIENT_AUTO", "SERVER_AUTO", "TASTE"]
QueryState = Literal["idle", "querying", "completed"]
Notification = str

REGIONS: Tuple[Region, ...] = ("CN", "EU", "IN", "SG", "RU", "TR", "TH", "GL")
QUERY_MODES: Tuple[QueryMode, ...] = ("MANUAL", "CLIENT_AUTO", "SERVER_AUTO", "TASTE")

PARAMETER_FIELDS: Tuple[str, ...] = (
    "ota_version",
    "model",
    "carrier",
    "guid",
    "region",
    "gray",
    "mode",
)


def query_mode_token(mode: QueryMode) -> str:
    """Return the wire token for a query mode (``CLIENT_AUTO`` -> ``client_auto``)."""
    if mode not in QUERY_MODES:
        raise ValueError(f"Unsupported query mode: {mode!r}")
    return mode.lower()


@dataclass
class QueryParameters:
    """Mutable session state used to build query requests."""

    ota_version: str = ""
    model: str = ""
    carrier: str = ""
    guid: str = ""
    region: Region = "CN"
    gray: bool = False
    mode: QueryMode = "MANUAL"


@dataclass(frozen=True)
class ParameterChange:
    """One applied edit to ``QueryParameters``."""

    field: str
    old: Any
    new: Any


@dataclass(frozen=True)
class QueryRequest:
    """Immutable request snapshot taken at submission time."""

    ota_version: str
    region: Region
    model: str
    carrier: str
    req_mode: str
    guid: Optional[str] = None
    gray: Optional[int] = None

    def to_payload(self) -> Dict[str, Any]:
        """Return the camelCase wire mapping, omitting absent optional fields."""
        payload: Dict[str, Any] = {
            "otaVersion": self.ota_version,
            "region": self.region,
            "model": self.model,
            "nvCarrier": self.carrier,
            "reqMode": self.req_mode,
        }
        if self.guid is not None:
            payload["guid"] = self.guid
        if self.gray is not None:
            payload["gray"] = self.gray
        return payload


@dataclass(frozen=True)
class QuerySuccess:
    """Completed response from the update-check service, whatever its code."""

    response_code: int
    err_msg: str = ""
    body: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "QuerySuccess":
        """Build a typed response from a decoded service payload."""
        raw_code = payload.get("responseCode")
        if raw_code is None:
            raise ValueError("Missing responseCode in query response.")
        try:
            code = int(str(raw_code).strip())
        except ValueError as exc:
            raise ValueError(f"Invalid responseCode in query response: {raw_code!r}") from exc
        err_msg = str(payload.get("errMsg") or "").strip()
        body_raw = payload.get("body")
        body = {str(k): v for k, v in body_raw.items()} if isinstance(body_raw, Mapping) else {}
        return cls(response_code=code, err_msg=err_msg, body=body)


@dataclass(frozen=True)
class QueryFailure:
    """The update-check call raised instead of returning a response."""

    message: str
    code: str = "QUERY_FAILED"


QueryOutcome = Union[QuerySuccess, QueryFailure]


__all__ = [
    "Notification",
    "PARAMETER_FIELDS",
    "ParameterChange",
    "QUERY_MODES",
    "QueryFailure",
    "QueryMode",
    "QueryOutcome",
    "QueryParameters",
    "QueryRequest",
    "QueryState",
    "QuerySuccess",
    "REGIONS",
    "Region",
    "query_mode_token",
]

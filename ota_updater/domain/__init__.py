"""Domain package exports for query value objects and pure derivation rules."""

from .derivation import derive_model, simplify_ota_version
from .query_models import (
    PARAMETER_FIELDS,
    QUERY_MODES,
    REGIONS,
    Notification,
    ParameterChange,
    QueryFailure,
    QueryMode,
    QueryOutcome,
    QueryParameters,
    QueryRequest,
    QueryState,
    QuerySuccess,
    Region,
    query_mode_token,
)
from .request_builder import build_query_request

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
    "build_query_request",
    "derive_model",
    "query_mode_token",
    "simplify_ota_version",
]

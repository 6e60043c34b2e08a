"""Snapshot ``QueryParameters`` into an immutable ``QueryRequest``."""

from __future__ import annotations

from .query_models import QueryParameters, QueryRequest, query_mode_token


def build_query_request(params: QueryParameters) -> QueryRequest:
    """Build the request for the current parameters.

    Blank ``guid`` is omitted; ``gray`` is only sent for CN with the flag set.
    The caller gates on a non-blank ``ota_version``.
    """
    guid = params.guid if (params.guid or "").strip() else None
    gray = 1 if params.region == "CN" and params.gray else None
    return QueryRequest(
        ota_version=params.ota_version,
        region=params.region,
        model=params.model,
        carrier=params.carrier,
        req_mode=query_mode_token(params.mode),
        guid=guid,
        gray=gray,
    )


__all__ = ["build_query_request"]

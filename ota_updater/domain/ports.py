from __future__ import annotations
from typing import Any, Dict, Optional, Protocol

from .query_models import QueryRequest, QuerySuccess, Region


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, meta: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = meta or {}


# ---- Ports (Hexagonal boundaries) ----
class UpdateQueryPort(Protocol):
    """Update-check service. Any raised exception is treated as a failed query."""

    def query_update(self, request: QueryRequest) -> QuerySuccess: ...


class RegionConfigPort(Protocol):
    """Per-region configuration lookup (default carrier ids)."""

    def get_default_carrier(self, region: Region, index: int = 0) -> str: ...


class DeviceInfoPort(Protocol):
    """Read-only device identification."""

    def read_current_ota_version(self) -> str: ...


class StoragePort(Protocol):
    """Source of persisted user settings."""

    def load_user_settings(self) -> Optional[Dict]: ...

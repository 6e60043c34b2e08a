from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

from ..domain.query_models import REGIONS
from ..utils.logging import env_requests_debug


@dataclass
class SettingsConfig:
    """Typed runtime settings loaded from ``user_settings.json`` via StorageLocal."""

    update_endpoint_url: str = ""
    request_timeout_s: int = 10
    retries: int = 0
    pump_interval_ms: int = 50
    ota_version_override: str = ""
    carrier_overrides: Dict[str, str] = field(default_factory=dict)


def _default_debug_logging() -> bool:
    return env_requests_debug()


class SettingsVM:
    """Keeps app settings state and validation, no I/O here."""

    def __init__(self, *, config: Optional[SettingsConfig] = None) -> None:
        self.config = config or SettingsConfig()
        self.api_key: str = ""
        self.debug_logging: bool = _default_debug_logging()

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def update_endpoint_url(self) -> str:
        return self.config.update_endpoint_url

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @property
    def retries(self) -> int:
        return self.config.retries

    @property
    def pump_interval_ms(self) -> int:
        return self.config.pump_interval_ms

    @property
    def ota_version_override(self) -> str:
        return self.config.ota_version_override

    @property
    def carrier_overrides(self) -> Dict[str, str]:
        return self.config.carrier_overrides

    @property
    def uses_mock_service(self) -> bool:
        """True when no endpoint is configured and the offline mock is used."""
        return not self.update_endpoint_url

    # ------------------------------------------------------------------
    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model."""

        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed_flat_keys = {
            *SettingsConfig.__annotations__.keys(),
            "api_key",
            "debug_logging",
        }
        unknown = set(payload.keys()) - allowed_flat_keys
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        updates: Dict[str, Any] = {}
        for cfg_key in SettingsConfig.__annotations__.keys():
            if cfg_key in payload:
                updates[cfg_key] = self._coerce_config_value(cfg_key, payload[cfg_key])
        if updates:
            self.config = replace(self.config, **updates)

        if "api_key" in payload:
            self.api_key = self._coerce_optional_str(payload["api_key"])

        if "debug_logging" in payload:
            self.debug_logging = self._coerce_bool(payload["debug_logging"])

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _coerce_config_value(self, key: str, raw: Any) -> Any:
        if key in {"update_endpoint_url", "ota_version_override"}:
            return self._coerce_optional_str(raw)
        if key in {"request_timeout_s", "pump_interval_ms"}:
            return self._coerce_int(key, raw, minimum=1)
        if key == "retries":
            return self._coerce_int(key, raw, minimum=0)
        if key == "carrier_overrides":
            return self._coerce_region_map(raw, key)
        raise ValueError(f"Unhandled config field: {key}")

    @staticmethod
    def _coerce_optional_str(value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_int(name: str, value: Any, *, minimum: Optional[int] = None) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        if isinstance(value, (int, float)):
            coerced = int(value)
        elif isinstance(value, str):
            try:
                coerced = int(value.strip())
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{name} must be an integer.") from exc
        else:
            raise ValueError(f"{name} must be an integer.")
        if minimum is not None and coerced < minimum:
            raise ValueError(f"{name} must be at least {minimum}.")
        return coerced

    @staticmethod
    def _coerce_region_map(value: Any, label: str) -> Dict[str, str]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError(f"{label} must be a mapping.")
        normalized: Dict[str, str] = {}
        for raw_key, raw_val in value.items():
            key = str(raw_key).strip().upper()
            if key not in REGIONS:
                raise ValueError(f"{label} contains unsupported region '{raw_key}'.")
            normalized[key] = "" if raw_val is None else str(raw_val).strip()
        return normalized


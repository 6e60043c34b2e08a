"""Pure helpers deriving default query parameters from raw device values."""

from __future__ import annotations

from typing import Dict

from .query_models import Region

_MODEL_SUFFIXES: Dict[str, str] = {
    "EU": "EEA",
    "IN": "IN",
}


def derive_model(ota_version: str, region: Region) -> str:
    """Return the default model for an OTA version and region.

    The model is the first ``_``-delimited segment of the version with a
    region suffix (``EEA`` for EU, ``IN`` for IN). A blank segment yields a
    blank model.
    """
    head = (ota_version or "").split("_", 1)[0]
    if not head.strip():
        return ""
    return head + _MODEL_SUFFIXES.get(region, "")


def simplify_ota_version(raw: str) -> str:
    """Drop the trailing ``.``-delimited segment (the build timestamp).

    A version without any ``.`` has nothing left and yields ``""``.
    """
    text = (raw or "").strip()
    if "." not in text:
        return ""
    return text.rsplit(".", 1)[0]


__all__ = ["derive_model", "simplify_ota_version"]

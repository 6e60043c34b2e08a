from __future__ import annotations

import pytest

from ota_updater.domain.derivation import derive_model, simplify_ota_version


@pytest.mark.parametrize(
    ("version", "region", "expected"),
    [
        ("ABC123_14_X", "CN", "ABC123"),
        ("ABC123_14_X", "EU", "ABC123EEA"),
        ("ABC123_14_X", "IN", "ABC123IN"),
        ("ABC123_14_X", "GL", "ABC123"),
        ("ABC123", "EU", "ABC123EEA"),
    ],
)
def test_derive_model_appends_region_suffix(version: str, region: str, expected: str) -> None:
    assert derive_model(version, region) == expected


def test_derive_model_blank_head_yields_blank_model() -> None:
    assert derive_model("", "EU") == ""
    assert derive_model("_14_X", "IN") == ""
    assert derive_model("   _x", "CN") == ""


def test_derive_model_is_deterministic() -> None:
    first = derive_model("PHZ110_11.A.01", "EU")
    second = derive_model("PHZ110_11.A.01", "EU")

    assert first == second == "PHZ110EEA"


def test_simplify_ota_version_drops_trailing_segment() -> None:
    assert simplify_ota_version("PHZ110_11.A.01_0010_202401010000") == "PHZ110_11.A"
    assert simplify_ota_version("  ABC123_14_X.20240101 ") == "ABC123_14_X"


def test_simplify_ota_version_without_dot_is_blank() -> None:
    assert simplify_ota_version("ABC123_14_X") == ""
    assert simplify_ota_version("  ") == ""
    assert simplify_ota_version("") == ""

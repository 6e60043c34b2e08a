from __future__ import annotations

import subprocess
from typing import Any, List

import pytest

from ota_updater.adapters.device_info import OTA_VERSION_PROPERTY, DeviceInfoAdapter
from ota_updater.adapters.region_config import DEFAULT_CARRIERS, RegionConfigTable
from ota_updater.domain.query_models import REGIONS


def test_every_region_has_a_default_carrier() -> None:
    table = RegionConfigTable()

    for region in REGIONS:
        assert table.get_default_carrier(region) == DEFAULT_CARRIERS[region][0]


def test_override_replaces_region_default() -> None:
    table = RegionConfigTable(overrides={"eu": " 11111111 ", "IN": ""})

    assert table.get_default_carrier("EU") == "11111111"
    assert table.get_default_carrier("IN") == "00011011"


def test_override_for_unknown_region_is_rejected() -> None:
    with pytest.raises(ValueError, match="unsupported region"):
        RegionConfigTable(overrides={"US": "1"})


def test_unknown_region_raises_lookup_error() -> None:
    table = RegionConfigTable(carriers={"CN": ("1",)})

    with pytest.raises(LookupError, match="No carrier configuration for region 'EU'"):
        table.get_default_carrier("EU")


def test_index_out_of_range_raises() -> None:
    table = RegionConfigTable(carriers={"CN": ("a", "b")})

    assert table.get_default_carrier("CN", 1) == "b"
    with pytest.raises(IndexError):
        table.get_default_carrier("CN", 2)


class _RunnerStub:
    def __init__(self, result: Any = None, exc: Exception | None = None) -> None:
        self.result = result
        self.exc = exc
        self.calls: List[Any] = []

    def __call__(self, command, **kwargs):
        self.calls.append((command, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.result


def test_device_info_reads_getprop_output() -> None:
    runner = _RunnerStub(
        subprocess.CompletedProcess(args=[], returncode=0, stdout="PHZ110_11.A.01_0010\n")
    )
    adapter = DeviceInfoAdapter(runner=runner)

    assert adapter.read_current_ota_version() == "PHZ110_11.A.01_0010"
    command, kwargs = runner.calls[0]
    assert command == ["getprop", OTA_VERSION_PROPERTY]
    assert kwargs["timeout"] == 2.0


def test_device_info_override_skips_command() -> None:
    runner = _RunnerStub(exc=AssertionError("must not run"))
    adapter = DeviceInfoAdapter(override=" ABC123_14_X ", runner=runner)

    assert adapter.read_current_ota_version() == "ABC123_14_X"
    assert runner.calls == []


def test_device_info_missing_tool_yields_blank() -> None:
    adapter = DeviceInfoAdapter(runner=_RunnerStub(exc=FileNotFoundError("getprop")))

    assert adapter.read_current_ota_version() == ""


def test_device_info_timeout_yields_blank() -> None:
    adapter = DeviceInfoAdapter(
        runner=_RunnerStub(exc=subprocess.TimeoutExpired(cmd="getprop", timeout=2.0))
    )

    assert adapter.read_current_ota_version() == ""


def test_device_info_nonzero_exit_yields_blank() -> None:
    runner = _RunnerStub(subprocess.CompletedProcess(args=[], returncode=1, stdout="junk"))

    assert DeviceInfoAdapter(runner=runner).read_current_ota_version() == ""

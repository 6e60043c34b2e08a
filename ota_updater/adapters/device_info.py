"""Device identification adapter reading the OTA version system property."""

from __future__ import annotations

import logging
import subprocess
from typing import Callable, Optional, Sequence

from ota_updater.domain.ports import DeviceInfoPort

OTA_VERSION_PROPERTY = "ro.build.version.ota"

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


class DeviceInfoAdapter(DeviceInfoPort):
    """Read ``ro.build.version.ota`` through ``getprop``.

    An explicit ``override`` wins over the device property, which lets the
    app run on hosts without Android tooling. Any failure yields ``""``.
    """

    def __init__(
        self,
        *,
        override: Optional[str] = None,
        command: Sequence[str] = ("getprop", OTA_VERSION_PROPERTY),
        timeout_s: float = 2.0,
        runner: Runner = subprocess.run,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.override = (override or "").strip()
        self.command = list(command)
        self.timeout_s = timeout_s
        self._run = runner

    def read_current_ota_version(self) -> str:
        if self.override:
            return self.override
        try:
            result = self._run(
                self.command,
                capture_output=True,
                text=True,
                timeout=self.timeout_s,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            self._log.info("OTA version unavailable (%s): %s", " ".join(self.command), exc)
            return ""
        if result.returncode != 0:
            self._log.info("getprop exited with %s", result.returncode)
            return ""
        return (result.stdout or "").strip()


__all__ = ["DeviceInfoAdapter", "OTA_VERSION_PROPERTY"]

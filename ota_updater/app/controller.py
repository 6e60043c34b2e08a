"""Adapter and session wiring for the desktop app runtime.

This module builds the concrete port adapters from values held by
:class:`ota_updater.viewmodels.settings_vm.SettingsVM` and assembles the
``QuerySession`` the views talk to.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from typing import Optional

from ..adapters.device_info import DeviceInfoAdapter
from ..adapters.region_config import RegionConfigTable
from ..adapters.update_check_mock import UpdateCheckMock
from ..adapters.update_check_rest import UpdateCheckRestAdapter
from ..domain.ports import DeviceInfoPort, RegionConfigPort, UpdateQueryPort
from ..usecases.query_session import QuerySession
from ..viewmodels.settings_vm import SettingsVM


class AppController:
    """Create runtime adapters and the query session from settings state.

    Call chain:
        ``ota_updater.app.main.App`` creates one instance after loading
        settings and calls ``build_session`` once at startup.
    """

    def __init__(self, settings_vm: SettingsVM) -> None:
        self._log = logging.getLogger(__name__)
        self.settings_vm = settings_vm

    def build_query_port(self) -> UpdateQueryPort:
        """Return the REST adapter, or the offline mock without an endpoint."""
        if self.settings_vm.uses_mock_service:
            self._log.info("No update endpoint configured; using offline mock service")
            return UpdateCheckMock(latency_s=0.5)
        return UpdateCheckRestAdapter(
            self.settings_vm.update_endpoint_url,
            api_key=self.settings_vm.api_key or None,
            request_timeout_s=self.settings_vm.request_timeout_s,
            retries=self.settings_vm.retries,
        )

    def build_region_config(self) -> RegionConfigPort:
        return RegionConfigTable(overrides=self.settings_vm.carrier_overrides)

    def build_device_info(self) -> DeviceInfoPort:
        return DeviceInfoAdapter(override=self.settings_vm.ota_version_override or None)

    def build_session(self, *, executor: Optional[Executor] = None) -> QuerySession:
        return QuerySession(
            query_port=self.build_query_port(),
            region_config=self.build_region_config(),
            device_info=self.build_device_info(),
            executor=executor,
        )


__all__ = ["AppController"]

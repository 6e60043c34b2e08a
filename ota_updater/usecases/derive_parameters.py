"""Derivation rules keeping ``model`` and ``carrier`` in step with their inputs.

Triggers:
    - ``ota_version`` or ``region`` changed -> recompute ``model`` (pure, in place).
    - ``region`` changed -> look up the default carrier on the worker executor.

Carrier lookups are not ordered against each other: whichever lookup
completes last sets the field. A failed lookup leaves the field untouched
and queues a notification.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from typing import Callable

from ota_updater.domain.derivation import derive_model
from ota_updater.domain.ports import RegionConfigPort
from ota_updater.domain.query_models import ParameterChange, QueryParameters, Region
from ota_updater.usecases.error_mapping import map_api_error
from ota_updater.usecases.notification_queue import NotificationQueue
from ota_updater.usecases.query_orchestrator import Post

ApplyFn = Callable[[str, str], None]

MODEL_TRIGGERS = frozenset({"ota_version", "region"})
CARRIER_TRIGGERS = frozenset({"region"})


class ParameterDerivation:
    """Listener recomputing dependent defaults on parameter changes."""

    def __init__(
        self,
        region_config: RegionConfigPort,
        *,
        executor: Executor,
        notifications: NotificationQueue,
        apply: ApplyFn,
        post: Post,
        carrier_index: int = 0,
    ) -> None:
        """Store collaborators.

        Args:
            region_config: Port answering default-carrier lookups.
            executor: Worker executor running the lookups.
            notifications: Queue receiving lookup failure messages.
            apply: Owner-thread setter for a derived field (``field, value``).
            post: Marshals a callback back onto the owner thread.
            carrier_index: Carrier list index requested from the port.
        """
        self._log = logging.getLogger(__name__)
        self.region_config = region_config
        self.notifications = notifications
        self.carrier_index = carrier_index
        self._executor = executor
        self._apply = apply
        self._post = post

    def prime(self, params: QueryParameters) -> None:
        """Run every rule once for the initial parameter values."""
        self._apply("model", derive_model(params.ota_version, params.region))
        self.refresh_carrier(params.region)

    def on_parameter_changed(self, params: QueryParameters, change: ParameterChange) -> None:
        if change.field in MODEL_TRIGGERS:
            self._apply("model", derive_model(params.ota_version, params.region))
        if change.field in CARRIER_TRIGGERS:
            self.refresh_carrier(params.region)

    def refresh_carrier(self, region: Region) -> None:
        """Start a default-carrier lookup for ``region``."""
        try:
            future = self._executor.submit(
                self.region_config.get_default_carrier, region, self.carrier_index
            )
        except Exception as exc:
            self._on_lookup_failed(region, exc)
            return
        future.add_done_callback(
            lambda fut: self._post(lambda: self._on_lookup_done(region, fut))
        )

    # ------------------------------------------------------------------
    def _on_lookup_done(self, region: Region, future: Future) -> None:
        try:
            carrier = future.result()
        except Exception as exc:
            self._on_lookup_failed(region, exc)
            return
        self._log.debug("Default carrier for %s: %s", region, carrier)
        self._apply("carrier", str(carrier or "").strip())

    def _on_lookup_failed(self, region: Region, exc: Exception) -> None:
        mapped = map_api_error(exc, default_code="CARRIER_LOOKUP_FAILED")
        self._log.warning("Carrier lookup failed for %s: %s", region, mapped.message)
        self.notifications.enqueue(f"Carrier lookup failed ({region}): {mapped.message}")


__all__ = ["CARRIER_TRIGGERS", "MODEL_TRIGGERS", "ParameterDerivation"]

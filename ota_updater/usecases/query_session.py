"""Session facade wiring parameters, derivation, orchestration and notifications.

The presentation layer talks only to this object:

    - ``set_parameter(field, value)`` edits ``QueryParameters`` and fires the
      change event the derivation rules listen to.
    - ``submit_query()`` snapshots the parameters and hands the request to the
      orchestrator.
    - ``subscribe_to_*`` register owner-thread callbacks.
    - ``pump()`` runs results posted by workers and delivers notifications; the
      UI loop calls it periodically.

All methods must be called from the owner thread.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, List, Optional

from ota_updater.domain.derivation import simplify_ota_version
from ota_updater.domain.ports import DeviceInfoPort, RegionConfigPort, UpdateQueryPort
from ota_updater.domain.query_models import (
    PARAMETER_FIELDS,
    QUERY_MODES,
    REGIONS,
    ParameterChange,
    QueryOutcome,
    QueryParameters,
    QueryState,
)
from ota_updater.domain.request_builder import build_query_request
from ota_updater.usecases.derive_parameters import ParameterDerivation
from ota_updater.usecases.error_mapping import map_api_error
from ota_updater.usecases.mailbox import Mailbox
from ota_updater.usecases.notification_queue import NotificationCallback, NotificationQueue
from ota_updater.usecases.query_orchestrator import OrchestratorHooks, QueryOrchestrator

ParameterListener = Callable[[QueryParameters, ParameterChange], None]
OutcomeCallback = Callable[[Optional[QueryOutcome]], None]
StateCallback = Callable[[QueryState], None]


def _subscribe(registry: List[Any], callback: Any) -> Callable[[], None]:
    registry.append(callback)

    def _unsubscribe() -> None:
        if callback in registry:
            registry.remove(callback)

    return _unsubscribe


class QuerySession:
    """One user session of update queries."""

    def __init__(
        self,
        *,
        query_port: UpdateQueryPort,
        region_config: RegionConfigPort,
        device_info: DeviceInfoPort,
        executor: Optional[Executor] = None,
        mailbox: Optional[Mailbox] = None,
        carrier_index: int = 0,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.device_info = device_info
        self.params = QueryParameters()
        self.notifications = NotificationQueue()
        self.mailbox = mailbox or Mailbox()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="ota-query"
        )

        self._parameter_listeners: List[ParameterListener] = []
        self._outcome_callbacks: List[OutcomeCallback] = []
        self._state_callbacks: List[StateCallback] = []

        self.orchestrator = QueryOrchestrator(
            query_port,
            executor=self._executor,
            notifications=self.notifications,
            post=self.mailbox.post,
            hooks=OrchestratorHooks(
                on_state_changed=self._emit_state,
                on_outcome_changed=self._emit_outcome,
            ),
        )
        self.derivation = ParameterDerivation(
            region_config,
            executor=self._executor,
            notifications=self.notifications,
            apply=self._apply_derived,
            post=self.mailbox.post,
            carrier_index=carrier_index,
        )
        self._parameter_listeners.append(self.derivation.on_parameter_changed)
        self._started = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Seed ``ota_version`` from the device once and prime derived fields."""
        if self._started:
            return
        self._started = True
        try:
            raw = self.device_info.read_current_ota_version()
        except Exception as exc:
            mapped = map_api_error(exc, default_code="DEVICE_INFO_FAILED")
            self._log.warning("Reading the device OTA version failed: %s", mapped.message)
            self.notifications.enqueue(f"Could not read device OTA version: {mapped.message}")
            raw = ""
        self.params.ota_version = simplify_ota_version(raw)
        self._log.info("Session started with OTA version %r", self.params.ota_version)
        self.derivation.prime(self.params)

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    def pump(self, max_items: Optional[int] = None) -> int:
        """Run worker results on the owner thread, then deliver notifications."""
        handled = self.mailbox.pump(max_items)
        self.notifications.drain()
        return handled

    # ------------------------------------------------------------------
    # Inbound operations
    # ------------------------------------------------------------------
    @property
    def state(self) -> QueryState:
        return self.orchestrator.state

    @property
    def outcome(self) -> Optional[QueryOutcome]:
        return self.orchestrator.outcome

    @property
    def can_submit(self) -> bool:
        return bool(self.params.ota_version.strip()) and not self.orchestrator.is_querying

    def set_parameter(self, field: str, value: Any) -> bool:
        """Apply one user edit.

        Returns:
            ``True`` when the stored value changed (listeners were notified).

        Raises:
            ValueError: For unknown fields or unsupported region/mode values.
        """
        coerced = self._coerce(field, value)
        old = getattr(self.params, field)
        if old == coerced:
            return False
        setattr(self.params, field, coerced)
        self._emit_change(ParameterChange(field=field, old=old, new=coerced))
        return True

    def submit_query(self) -> bool:
        """Build a request from the current parameters and start the query.

        Returns:
            ``False`` when the OTA version is blank or a query is in flight.
        """
        if not self.params.ota_version.strip():
            self._log.info("Query not submitted: OTA version is blank")
            return False
        request = build_query_request(self.params)
        return self.orchestrator.submit(request)

    def subscribe_to_parameters(self, callback: ParameterListener) -> Callable[[], None]:
        return _subscribe(self._parameter_listeners, callback)

    def subscribe_to_outcome(self, callback: OutcomeCallback) -> Callable[[], None]:
        return _subscribe(self._outcome_callbacks, callback)

    def subscribe_to_state(self, callback: StateCallback) -> Callable[[], None]:
        return _subscribe(self._state_callbacks, callback)

    def subscribe_to_notifications(self, callback: NotificationCallback) -> Callable[[], None]:
        return self.notifications.subscribe(callback)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _apply_derived(self, field: str, value: str) -> None:
        old = getattr(self.params, field)
        if old == value:
            return
        setattr(self.params, field, value)
        self._emit_change(ParameterChange(field=field, old=old, new=value))

    def _emit_change(self, change: ParameterChange) -> None:
        for listener in list(self._parameter_listeners):
            listener(self.params, change)

    def _emit_state(self, state: QueryState) -> None:
        for callback in list(self._state_callbacks):
            callback(state)

    def _emit_outcome(self, outcome: Optional[QueryOutcome]) -> None:
        for callback in list(self._outcome_callbacks):
            callback(outcome)

    @staticmethod
    def _coerce(field: str, value: Any) -> Any:
        if field not in PARAMETER_FIELDS:
            raise ValueError(f"Unknown query parameter: {field!r}")
        if field == "gray":
            if isinstance(value, str):
                return value.strip().lower() in {"1", "true", "yes", "on"}
            return bool(value)
        text = "" if value is None else str(value).strip()
        if field == "region":
            text = text.upper()
            if text not in REGIONS:
                raise ValueError(f"Unsupported region: {value!r}")
        elif field == "mode":
            text = text.upper()
            if text not in QUERY_MODES:
                raise ValueError(f"Unsupported query mode: {value!r}")
        return text


__all__ = ["QuerySession"]

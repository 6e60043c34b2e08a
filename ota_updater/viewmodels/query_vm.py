"""View-model for the update query screen.

Call context:
    ``ota_updater.app.main.App`` builds one ``QueryVM`` around the
    ``QuerySession`` and binds ``QueryWindowView`` callbacks to it. The VM
    holds no transport logic; it translates view input into session calls
    and session events into view-facing DTOs.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from ..domain.query_models import (
    QUERY_MODES,
    REGIONS,
    Notification,
    ParameterChange,
    QueryOutcome,
    QueryParameters,
    QueryState,
)
from ..usecases.query_session import QuerySession
from .response_format import ResponseRow, outcome_rows

REGION_LABELS: Dict[str, str] = {
    "CN": "China",
    "EU": "Europe",
    "IN": "India",
    "SG": "Singapore",
    "RU": "Russia",
    "TR": "Turkey",
    "TH": "Thailand",
    "GL": "Global",
}

MODE_LABELS: Dict[str, str] = {
    "MANUAL": "Manual",
    "CLIENT_AUTO": "Client auto",
    "SERVER_AUTO": "Server auto",
    "TASTE": "Taste",
}

TEXT_FIELDS = ("ota_version", "model", "carrier", "guid")

MSG_VERSION_REQUIRED = "Enter an OTA version first."


class QueryVM:
    """Owns query-screen UI state and commands; no I/O here."""

    def __init__(
        self,
        session: QuerySession,
        *,
        on_fields_changed: Optional[Callable[[Dict[str, str]], None]] = None,
        on_busy_changed: Optional[Callable[[bool], None]] = None,
        on_response_changed: Optional[Callable[[List[ResponseRow]], None]] = None,
        on_toast: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.session = session
        self.on_fields_changed = on_fields_changed
        self.on_busy_changed = on_busy_changed
        self.on_response_changed = on_response_changed
        self.on_toast = on_toast
        self.expand_more_parameters: bool = True
        self.last_notification: str = ""
        self._unsubscribers = [
            session.subscribe_to_parameters(self._on_parameters_changed),
            session.subscribe_to_state(self._on_state_changed),
            session.subscribe_to_outcome(self._on_outcome_changed),
            session.subscribe_to_notifications(self._on_notification),
        ]

    # ------------------------------------------------------------------
    # View state
    # ------------------------------------------------------------------
    @property
    def params(self) -> QueryParameters:
        return self.session.params

    def fields(self) -> Dict[str, str]:
        """Return the text-field values shown by the view."""
        return {name: getattr(self.params, name) for name in TEXT_FIELDS}

    @staticmethod
    def region_labels() -> List[str]:
        return [REGION_LABELS[region] for region in REGIONS]

    @staticmethod
    def mode_labels() -> List[str]:
        return [MODE_LABELS[mode] for mode in QUERY_MODES]

    @property
    def region_index(self) -> int:
        return REGIONS.index(self.params.region)

    @property
    def mode_index(self) -> int:
        return QUERY_MODES.index(self.params.mode)

    @property
    def gray_visible(self) -> bool:
        return self.params.region == "CN"

    @property
    def busy(self) -> bool:
        return self.session.state == "querying"

    @property
    def query_enabled(self) -> bool:
        return self.session.can_submit

    def response_rows(self) -> List[ResponseRow]:
        return outcome_rows(self.session.outcome)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def set_field(self, name: str, value: str) -> None:
        self._set(name, value)

    def set_region_index(self, index: int) -> None:
        self._set("region", REGIONS[index])

    def set_mode_index(self, index: int) -> None:
        self._set("mode", QUERY_MODES[index])

    def set_gray(self, enabled: bool) -> None:
        self._set("gray", bool(enabled))

    def cmd_toggle_more_parameters(self) -> bool:
        self.expand_more_parameters = not self.expand_more_parameters
        return self.expand_more_parameters

    def cmd_query(self) -> bool:
        if self.busy:
            return False
        if not self.params.ota_version.strip():
            self._toast(MSG_VERSION_REQUIRED)
            return False
        return self.session.submit_query()

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _set(self, name: str, value: object) -> None:
        try:
            self.session.set_parameter(name, value)
        except ValueError as exc:
            self._toast(str(exc))

    def _toast(self, message: str) -> None:
        if self.on_toast:
            self.on_toast(message)

    def _on_parameters_changed(self, _params: QueryParameters, _change: ParameterChange) -> None:
        if self.on_fields_changed:
            self.on_fields_changed(self.fields())

    def _on_state_changed(self, state: QueryState) -> None:
        if self.on_busy_changed:
            self.on_busy_changed(state == "querying")

    def _on_outcome_changed(self, outcome: Optional[QueryOutcome]) -> None:
        if self.on_response_changed:
            self.on_response_changed(outcome_rows(outcome))

    def _on_notification(self, message: Notification) -> None:
        self.last_notification = message
        self._toast(message)


__all__ = ["MODE_LABELS", "MSG_VERSION_REQUIRED", "QueryVM", "REGION_LABELS"]

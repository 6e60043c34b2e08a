# ota_updater/app/main.py
from __future__ import annotations
import logging
import os
from typing import Dict, List, Optional, Tuple

# ---- Views (UI-only) ----
from .views.query_window import QueryWindowView

# ---- ViewModels ----
from ..viewmodels.query_vm import QueryVM
from ..viewmodels.settings_vm import SettingsVM

# ---- Session & Adapters ----
from .controller import AppController
from ..adapters.storage_local import StorageLocal
from ..utils import logging as logging_utils

logging_utils.configure_root()


class App:
    """Bootstrap: wire the view to the query VM/session and pump worker results."""

    def __init__(self) -> None:
        self._log = logging.getLogger(__name__)
        self.win = QueryWindowView(
            on_field_changed=self._on_field_changed,
            on_region_selected=self._on_region_selected,
            on_mode_selected=self._on_mode_selected,
            on_gray_changed=self._on_gray_changed,
            on_query=self._on_query,
            on_toggle_more=self._on_toggle_more,
        )
        self.win.protocol("WM_DELETE_WINDOW", self._on_close)

        # ---- Settings (LocalStorage Adapter) ----
        self.settings_vm = SettingsVM()
        self._storage_root = os.environ.get("OTA_UPDATER_STORAGE_ROOT") or "."
        self._storage = StorageLocal(root_dir=self._storage_root)
        self._load_user_settings()

        # ---- Session & ViewModel ----
        self.controller = AppController(self.settings_vm)
        self.session = self.controller.build_session()
        self.query_vm = QueryVM(
            self.session,
            on_fields_changed=self._apply_fields,
            on_busy_changed=self._apply_busy,
            on_response_changed=self._apply_response,
            on_toast=self.win.show_toast,
        )

        self._pump_after_id: Optional[str] = None
        self.session.start()
        self._refresh_view()
        if self.settings_vm.uses_mock_service:
            self.win.show_toast("Offline mode: no update endpoint configured.")
        self._schedule_pump()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def _load_user_settings(self) -> None:
        try:
            payload = self._storage.load_user_settings()
        except Exception as exc:
            self._log.exception("Failed to read user settings")
            self.win.show_toast(f"Could not load settings: {exc}")
            payload = None
        if payload:
            try:
                self.settings_vm.apply_dict(payload)
            except ValueError as exc:
                self.win.show_toast(str(exc))
        level = logging_utils.apply_gui_preferences(self.settings_vm.debug_logging)
        self._log.debug("Log level set to %s", logging.getLevelName(level))

    # ------------------------------------------------------------------
    # View -> VM
    # ------------------------------------------------------------------
    def _on_field_changed(self, name: str, value: str) -> None:
        self.query_vm.set_field(name, value)
        self.win.set_query_enabled(self.query_vm.query_enabled)

    def _on_region_selected(self, index: int) -> None:
        self.query_vm.set_region_index(index)
        self.win.set_gray(self.query_vm.params.gray, visible=self.query_vm.gray_visible)

    def _on_mode_selected(self, index: int) -> None:
        self.query_vm.set_mode_index(index)

    def _on_gray_changed(self, checked: bool) -> None:
        self.query_vm.set_gray(checked)

    def _on_query(self) -> None:
        self.win.focus_set()
        self.query_vm.cmd_query()

    def _on_toggle_more(self) -> None:
        self.win.set_more_parameters_visible(self.query_vm.cmd_toggle_more_parameters())

    # ------------------------------------------------------------------
    # VM -> View
    # ------------------------------------------------------------------
    def _refresh_view(self) -> None:
        vm = self.query_vm
        self.win.set_fields(vm.fields())
        self.win.set_region_options(vm.region_labels(), vm.region_index)
        self.win.set_mode_options(vm.mode_labels(), vm.mode_index)
        self.win.set_gray(vm.params.gray, visible=vm.gray_visible)
        self.win.set_more_parameters_visible(vm.expand_more_parameters)
        self.win.set_busy(vm.busy)
        self.win.set_query_enabled(vm.query_enabled)
        self.win.set_response_rows(vm.response_rows())

    def _apply_fields(self, values: Dict[str, str]) -> None:
        self.win.set_fields(values)
        self.win.set_query_enabled(self.query_vm.query_enabled)

    def _apply_busy(self, busy: bool) -> None:
        self.win.set_busy(busy)
        self.win.set_query_enabled(self.query_vm.query_enabled)

    def _apply_response(self, rows: List[Tuple[str, str]]) -> None:
        self.win.set_response_rows(rows)

    # ------------------------------------------------------------------
    # Owner-thread pump
    # ------------------------------------------------------------------
    def _schedule_pump(self) -> None:
        self._pump_after_id = self.win.after(self.settings_vm.pump_interval_ms, self._on_pump_tick)

    def _on_pump_tick(self) -> None:
        """Cooperative tick executed on the Tkinter thread."""
        self._pump_after_id = None
        try:
            self.session.pump()
        except Exception:
            self._log.exception("Session pump failed")
        finally:
            self._schedule_pump()

    def _on_close(self) -> None:
        if self._pump_after_id:
            self.win.after_cancel(self._pump_after_id)
            self._pump_after_id = None
        self.query_vm.close()
        self.session.close()
        self.win.destroy()


def main() -> None:
    app = App()
    app.win.mainloop()


if __name__ == "__main__":
    main()

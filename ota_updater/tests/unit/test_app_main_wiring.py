from __future__ import annotations

import logging
from typing import List
from unittest.mock import MagicMock

import pytest

pytest.importorskip("tkinter")

from ota_updater.adapters.storage_local import StorageLocal  # noqa: E402
from ota_updater.app.main import App  # noqa: E402
from ota_updater.viewmodels.settings_vm import SettingsVM  # noqa: E402


class _WindowRecorder:
    def __init__(self) -> None:
        self.toasts: List[str] = []
        self.scheduled: List[int] = []
        self.cancelled: List[str] = []
        self.destroyed = False

    def show_toast(self, message: str) -> None:
        self.toasts.append(message)

    def after(self, delay_ms: int, _callback) -> str:
        self.scheduled.append(delay_ms)
        return f"after#{len(self.scheduled)}"

    def after_cancel(self, after_id: str) -> None:
        self.cancelled.append(after_id)

    def destroy(self) -> None:
        self.destroyed = True


def _app_for_tests() -> App:
    app = App.__new__(App)
    app._log = logging.getLogger("test.app")
    app.win = _WindowRecorder()
    app.settings_vm = SettingsVM()
    app.session = MagicMock()
    app.query_vm = MagicMock()
    app._pump_after_id = None
    return app


def test_pump_tick_drains_session_and_reschedules() -> None:
    app = _app_for_tests()
    app.settings_vm.apply_dict({"pump_interval_ms": 75})

    app._on_pump_tick()

    app.session.pump.assert_called_once_with()
    assert app.win.scheduled == [75]
    assert app._pump_after_id == "after#1"


def test_pump_tick_reschedules_when_pump_raises() -> None:
    app = _app_for_tests()
    app.session.pump.side_effect = RuntimeError("tk gone")

    app._on_pump_tick()

    assert app.win.scheduled == [app.settings_vm.pump_interval_ms]
    assert app._pump_after_id == "after#1"


def test_close_cancels_pump_and_releases_session() -> None:
    app = _app_for_tests()
    app._schedule_pump()

    app._on_close()

    assert app.win.cancelled == ["after#1"]
    app.query_vm.close.assert_called_once_with()
    app.session.close.assert_called_once_with()
    assert app.win.destroyed is True


def test_broken_settings_file_becomes_toast(tmp_path) -> None:
    (tmp_path / "user_settings.json").write_text("{not json", encoding="utf-8")
    app = _app_for_tests()
    app._storage = StorageLocal(root_dir=str(tmp_path))

    app._load_user_settings()

    assert app.win.toasts and app.win.toasts[0].startswith("Could not load settings:")


def test_invalid_settings_keys_become_toast(tmp_path) -> None:
    (tmp_path / "user_settings.json").write_text('{"poll_interval_ms": {}}', encoding="utf-8")
    app = _app_for_tests()
    app._storage = StorageLocal(root_dir=str(tmp_path))

    app._load_user_settings()

    assert app.win.toasts == ["Unsupported settings keys: poll_interval_ms"]

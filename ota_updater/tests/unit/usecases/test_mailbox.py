from __future__ import annotations

from typing import List

from ota_updater.usecases.mailbox import Mailbox


def test_pump_runs_callbacks_in_post_order() -> None:
    mailbox = Mailbox()
    calls: List[int] = []
    for index in range(3):
        mailbox.post(lambda index=index: calls.append(index))

    assert mailbox.pending == 3
    assert mailbox.pump() == 3
    assert calls == [0, 1, 2]
    assert mailbox.pending == 0


def test_pump_limits_batch_size() -> None:
    mailbox = Mailbox()
    calls: List[int] = []
    for index in range(4):
        mailbox.post(lambda index=index: calls.append(index))

    assert mailbox.pump(max_items=3) == 3
    assert calls == [0, 1, 2]
    assert mailbox.pending == 1


def test_failing_callback_does_not_stop_pump(caplog) -> None:
    mailbox = Mailbox()
    calls: List[str] = []

    def _boom() -> None:
        raise RuntimeError("boom")

    mailbox.post(_boom)
    mailbox.post(lambda: calls.append("after"))

    with caplog.at_level("ERROR"):
        handled = mailbox.pump()

    assert handled == 2
    assert calls == ["after"]
    assert "Mailbox callback failed" in caplog.text

from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import Any, Callable, List, Tuple

import pytest


class ManualExecutor(Executor):
    """Executor that runs submitted calls only when the test says so."""

    def __init__(self) -> None:
        self.pending: List[Tuple[Callable[..., Any], tuple, dict, Future]] = []
        self.submitted = 0

    def submit(self, fn, /, *args, **kwargs) -> Future:
        future: Future = Future()
        self.pending.append((fn, args, kwargs, future))
        self.submitted += 1
        return future

    def run(self, index: int = 0) -> None:
        fn, args, kwargs, future = self.pending.pop(index)
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)

    def run_all(self) -> None:
        while self.pending:
            self.run(0)

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        self.pending.clear()


class FailingExecutor(Executor):
    """Executor whose ``submit`` always raises, like a shut-down pool."""

    def submit(self, fn, /, *args, **kwargs) -> Future:
        raise RuntimeError("cannot schedule new futures after shutdown")


@pytest.fixture
def manual_executor() -> ManualExecutor:
    return ManualExecutor()


@pytest.fixture
def failing_executor() -> FailingExecutor:
    return FailingExecutor()

"""Single-flight lifecycle for update queries.

State machine::

    idle --submit--> querying --resolve--> completed --submit--> querying

``submit`` is rejected while a query is in flight. The port call runs on a
worker executor; its result is posted back to the owner thread, recorded as
``QuerySuccess`` or ``QueryFailure``, classified, and queued as a
notification. Every path out of ``querying`` ends in ``completed``.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Callable, Optional

from ota_updater.domain.ports import UpdateQueryPort
from ota_updater.domain.query_models import (
    QueryFailure,
    QueryOutcome,
    QueryRequest,
    QueryState,
    QuerySuccess,
)
from ota_updater.usecases.classify_response import classify_outcome
from ota_updater.usecases.error_mapping import map_api_error
from ota_updater.usecases.notification_queue import NotificationQueue

Post = Callable[[Callable[[], None]], None]


def _noop(*_: object, **__: object) -> None:
    """Default no-op callback used for hooks."""


def _run_inline(callback: Callable[[], None]) -> None:
    callback()


@dataclass
class OrchestratorHooks:
    """Optional callbacks fired on the owner thread."""

    on_state_changed: Callable[[QueryState], None] = _noop
    on_outcome_changed: Callable[[Optional[QueryOutcome]], None] = _noop

    def __post_init__(self) -> None:
        self.on_state_changed = self.on_state_changed or _noop
        self.on_outcome_changed = self.on_outcome_changed or _noop


class QueryOrchestrator:
    """Run at most one update query at a time and record its outcome."""

    def __init__(
        self,
        query_port: UpdateQueryPort,
        *,
        executor: Executor,
        notifications: NotificationQueue,
        post: Post = _run_inline,
        hooks: Optional[OrchestratorHooks] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.query_port = query_port
        self.notifications = notifications
        self.hooks = hooks or OrchestratorHooks()
        self._executor = executor
        self._post = post
        self._state: QueryState = "idle"
        self._request: Optional[QueryRequest] = None
        self._outcome: Optional[QueryOutcome] = None
        self._generation = 0

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def is_querying(self) -> bool:
        return self._state == "querying"

    @property
    def request(self) -> Optional[QueryRequest]:
        """Request of the in-flight or most recent query."""
        return self._request

    @property
    def outcome(self) -> Optional[QueryOutcome]:
        """Outcome of the last completed query; ``None`` while querying."""
        return self._outcome

    def submit(self, request: QueryRequest) -> bool:
        """Start a query for ``request``.

        Returns:
            ``False`` when a query is already in flight (nothing is started),
            ``True`` otherwise.
        """
        if self._state == "querying":
            self._log.info("Query rejected: another query is in flight")
            return False

        self._generation += 1
        generation = self._generation
        self._request = request
        self._outcome = None
        self._state = "querying"
        self.hooks.on_outcome_changed(None)
        self.hooks.on_state_changed("querying")
        self._log.info(
            "Query #%d started: region=%s model=%s mode=%s",
            generation,
            request.region,
            request.model,
            request.req_mode,
        )

        try:
            future = self._executor.submit(self.query_port.query_update, request)
        except Exception as exc:
            self._resolve(generation, self._failure_from(exc))
            return True
        future.add_done_callback(
            lambda fut: self._post(lambda: self._on_future_done(generation, fut))
        )
        return True

    # ------------------------------------------------------------------
    def _on_future_done(self, generation: int, future: Future) -> None:
        try:
            response = future.result()
        except Exception as exc:
            outcome: QueryOutcome = self._failure_from(exc)
        else:
            if isinstance(response, QuerySuccess):
                outcome = response
            else:
                outcome = QueryFailure(
                    message=f"Unexpected query response: {type(response).__name__}",
                )
        self._resolve(generation, outcome)

    def _resolve(self, generation: int, outcome: QueryOutcome) -> None:
        if generation != self._generation or self._state != "querying":
            self._log.warning("Dropping stale outcome for query #%d", generation)
            return
        self._outcome = outcome
        self._state = "completed"
        if isinstance(outcome, QueryFailure):
            self._log.warning("Query #%d failed: %s", generation, outcome.message)
        else:
            self._log.info("Query #%d completed: responseCode=%s", generation, outcome.response_code)
        self.hooks.on_state_changed("completed")
        self.hooks.on_outcome_changed(outcome)
        self.notifications.enqueue(classify_outcome(outcome))

    def _failure_from(self, exc: Exception) -> QueryFailure:
        mapped = map_api_error(exc, default_code="QUERY_FAILED")
        return QueryFailure(message=mapped.message, code=mapped.code)


__all__ = ["OrchestratorHooks", "Post", "QueryOrchestrator"]

"""Commit handling and the guarded dependent (repository) load."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from queue import Empty, Queue

from ..directory.errors import DirectoryError
from ..directory.types import Repository, UserCandidate
from .jobs import JobRunner, start_daemon_thread
from .state import (
    LOAD_FAILED,
    LOAD_LOADED,
    LOAD_LOADING,
    DependentLoadState,
    dependent_load_error_message,
)

logger = logging.getLogger(__name__)

ListDependentsFn = Callable[[str], Sequence[Repository]]


class SelectionDispatcher:
    """Single entry point for committing a candidate from click or keyboard.

    Recommitting the candidate that is already selected is a no-op unless its
    last dependent load failed, in which case the commit acts as a retry.
    """

    def __init__(
        self,
        list_dependents: ListDependentsFn,
        *,
        on_selection_committed: Callable[[UserCandidate], None] | None = None,
        on_state_changed: Callable[[DependentLoadState], None] | None = None,
        run_job: JobRunner = start_daemon_thread,
    ) -> None:
        self._list_dependents = list_dependents
        self.on_selection_committed = on_selection_committed
        self.on_state_changed = on_state_changed
        self._run_job = run_job
        self.selected: UserCandidate | None = None
        self.load_state = DependentLoadState()
        self._load_generation = 0
        self._active_generation: int | None = None
        self._events: Queue[tuple[object, ...]] = Queue()

    def _publish(self, state: DependentLoadState) -> None:
        self.load_state = state
        if self.on_state_changed is not None:
            self.on_state_changed(state)

    def is_redundant(self, candidate: UserCandidate) -> bool:
        return (
            self.selected is not None
            and self.selected.id == candidate.id
            and not self.load_state.failed
        )

    def commit(self, candidate: UserCandidate) -> bool:
        """Select ``candidate`` and load its repositories; return whether a load started."""
        if self.is_redundant(candidate):
            logger.debug("commit of %s ignored; already %s", candidate.login, self.load_state.status)
            return False

        self.selected = candidate
        if self.on_selection_committed is not None:
            self.on_selection_committed(candidate)

        self._load_generation += 1
        generation = self._load_generation
        self._active_generation = generation
        self._publish(DependentLoadState(candidate=candidate, status=LOAD_LOADING))
        logger.info("loading repositories for %s", candidate.login)

        login = candidate.login

        def run_worker() -> None:
            try:
                repositories = list(self._list_dependents(login))
            except DirectoryError as exc:
                self._events.put(("failed", generation, candidate, exc))
                return
            except Exception as exc:
                logger.exception("unexpected failure while loading repositories for %s", login)
                self._events.put(("failed", generation, candidate, exc))
                return
            self._events.put(("done", generation, candidate, repositories))

        self._run_job(run_worker, f"lazyhub-repos-{generation}")
        return True

    def retry(self) -> bool:
        """Recommit the selected candidate when its last load failed."""
        if self.selected is None or not self.load_state.failed:
            return False
        return self.commit(self.selected)

    def poll_updates(self, timeout_seconds: float = 0.0) -> bool:
        """Apply finished loads for the current commit; drop superseded ones."""
        changed = False

        def consume_event(event: tuple[object, ...]) -> None:
            nonlocal changed
            kind, generation, candidate, payload = event
            if generation != self._active_generation:
                logger.debug("dropping superseded repository load for %s", candidate.login)
                return
            self._active_generation = None
            if kind == "done":
                self._publish(
                    DependentLoadState(candidate=candidate, status=LOAD_LOADED, data=tuple(payload))
                )
            else:
                logger.warning("repository load for %s failed: %s", candidate.login, payload)
                self._publish(
                    DependentLoadState(
                        candidate=candidate,
                        status=LOAD_FAILED,
                        error_message=dependent_load_error_message(candidate),
                    )
                )
            changed = True

        if timeout_seconds > 0:
            try:
                first_event = self._events.get(timeout=timeout_seconds)
            except Empty:
                first_event = None
            if first_event is not None:
                consume_event(first_event)

        while True:
            try:
                event = self._events.get_nowait()
            except Empty:
                break
            consume_event(event)
        return changed

    def dispose(self) -> None:
        self._active_generation = None

"""Token-tagged search requests with last-issued-wins reconciliation."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from queue import Empty, Queue

from ..directory.errors import DirectoryError
from ..directory.types import UserCandidate
from .jobs import JobRunner, start_daemon_thread
from .selection import ResultSelectionModel
from .settings import SearchSettings
from .state import SEARCH_ERROR_MESSAGE, SEARCH_TIMEOUT_MESSAGE

logger = logging.getLogger(__name__)

SearchFn = Callable[[str, int], Sequence[UserCandidate]]


class QuerySequencer:
    """Issue one search per trigger and apply only the latest token's outcome.

    Superseded requests are never aborted; their results are ignored when
    they arrive. State is only mutated from :meth:`trigger`,
    :meth:`poll_updates` and :meth:`expire_overdue`, all on the host thread.
    """

    def __init__(
        self,
        search: SearchFn,
        selection: ResultSelectionModel,
        *,
        settings: SearchSettings | None = None,
        on_change: Callable[[], None] | None = None,
        run_job: JobRunner = start_daemon_thread,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._search = search
        self.selection = selection
        self.settings = settings or SearchSettings()
        self.on_change = on_change
        self._run_job = run_job
        self._clock = clock
        self.loading = False
        self.error: str | None = None
        self.searched_query: str | None = None
        self.latest_token = 0
        self._active_token: int | None = None
        self._active_query = ""
        self._issued_at = 0.0
        self._events: Queue[tuple[object, ...]] = Queue()

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    @property
    def active_token(self) -> int | None:
        """Token whose response may still update state, if any is outstanding."""
        return self._active_token

    def trigger(self, query: str) -> int | None:
        """Start a search for ``query`` and return its token.

        Blank queries clear results immediately and return ``None``.
        """
        if not query.strip():
            if self._active_token is not None:
                logger.debug("blank query retires in-flight search token %d", self._active_token)
            self._active_token = None
            self.loading = False
            self.error = None
            self.searched_query = None
            self.selection.replace_candidates(())
            self._changed()
            return None

        self.latest_token += 1
        token = self.latest_token
        self._active_token = token
        self._active_query = query
        self._issued_at = self._clock()
        self.loading = True
        self.error = None
        self.selection.reset_focus()
        logger.debug("search token %d issued for %r", token, query)

        limit = self.settings.page_size

        def run_worker() -> None:
            try:
                results = list(self._search(query, limit))
            except DirectoryError as exc:
                self._events.put(("failed", token, query, exc))
                return
            except Exception as exc:
                logger.exception("unexpected failure while searching for %r", query)
                self._events.put(("failed", token, query, exc))
                return
            self._events.put(("done", token, query, results))

        self._changed()
        self._run_job(run_worker, f"lazyhub-search-{token}")
        return token

    def poll_updates(self, timeout_seconds: float = 0.0) -> bool:
        """Drain finished searches; return whether any visible state changed."""
        changed = False

        def consume_event(event: tuple[object, ...]) -> None:
            nonlocal changed
            kind, token, query, payload = event
            if token != self.latest_token or token != self._active_token:
                logger.debug("dropping stale %s response for token %s (%r)", kind, token, query)
                return
            self._active_token = None
            self.loading = False
            self.searched_query = query
            if kind == "done":
                self.error = None
                self.selection.replace_candidates(payload)
            else:
                logger.warning("search for %r failed: %s", query, payload)
                self.error = SEARCH_ERROR_MESSAGE
                self.selection.replace_candidates(())
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

        if changed:
            self._changed()
        return changed

    def expire_overdue(self, now: float | None = None) -> bool:
        """Retire the current search if it outlived the request deadline."""
        if self._active_token is None:
            return False
        current = self._clock() if now is None else now
        if current - self._issued_at < self.settings.search_deadline_seconds:
            return False
        logger.warning(
            "search token %d for %r timed out after %.1fs",
            self._active_token,
            self._active_query,
            current - self._issued_at,
        )
        self._active_token = None
        self.loading = False
        self.error = SEARCH_TIMEOUT_MESSAGE
        self.searched_query = self._active_query
        self.selection.replace_candidates(())
        self._changed()
        return True

    def dispose(self) -> None:
        """Retire any outstanding token so late responses are ignored."""
        self._active_token = None
        self.loading = False

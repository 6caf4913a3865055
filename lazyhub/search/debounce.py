"""Deadline-based debounce for query edits.

There is no timer thread: the host loop calls :meth:`DebounceScheduler.poll`
on every tick, and the scheduler fires once the quiet period has elapsed.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from .settings import DEFAULT_DEBOUNCE_SECONDS


class DebounceScheduler:
    """Coalesce rapid input changes into a single deferred trigger."""

    def __init__(
        self,
        trigger: Callable[[str], None],
        *,
        delay_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._trigger = trigger
        self.delay_seconds = max(0.0, delay_seconds)
        self._clock = clock
        self._pending_query: str | None = None
        self._due_at = 0.0

    @property
    def pending(self) -> bool:
        return self._pending_query is not None

    def on_input_changed(self, query: str) -> None:
        """Re-arm the timer for ``query``, replacing any pending one."""
        self._pending_query = query
        self._due_at = self._clock() + self.delay_seconds

    def seconds_until_due(self, now: float | None = None) -> float | None:
        """Return remaining wait, or ``None`` when nothing is scheduled."""
        if self._pending_query is None:
            return None
        current = self._clock() if now is None else now
        return max(0.0, self._due_at - current)

    def poll(self, now: float | None = None) -> bool:
        """Fire the trigger if the deadline passed; return whether it fired."""
        if self._pending_query is None:
            return False
        current = self._clock() if now is None else now
        if current < self._due_at:
            return False
        query = self._pending_query
        self._pending_query = None
        self._due_at = 0.0
        self._trigger(query)
        return True

    def cancel(self) -> None:
        self._pending_query = None
        self._due_at = 0.0

"""Incremental search controller wiring debounce, sequencing, selection and commit."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from ..directory.client import DirectoryClient
from ..directory.types import UserCandidate
from .debounce import DebounceScheduler
from .dispatcher import SelectionDispatcher
from .jobs import JobRunner, start_daemon_thread
from .selection import ResultSelectionModel
from .sequencer import QuerySequencer
from .settings import SearchSettings
from .state import INPUT_OWNER_RESULTS, DependentLoadState, SearchSnapshot

logger = logging.getLogger(__name__)

RETRY_KEYS = frozenset({"r", "R", "CTRL_R"})


class SearchController:
    """Own all search state for one session and publish it through callbacks.

    Keys use the normalized tokens produced by :func:`lazyhub.runtime.input.read_key`
    (``"UP"``, ``"DOWN"``, ``"ENTER"``, ``"ESC"``, ``"BACKSPACE"``, ``"TAB"``,
    ``"CTRL_U"`` and printable characters). The host must call :meth:`tick`
    regularly to fire debounced searches and apply finished requests.
    """

    def __init__(
        self,
        client: DirectoryClient,
        settings: SearchSettings | None = None,
        *,
        on_search_state_changed: Callable[[SearchSnapshot], None] | None = None,
        on_selection_committed: Callable[[UserCandidate], None] | None = None,
        on_dependent_load_state_changed: Callable[[DependentLoadState], None] | None = None,
        run_job: JobRunner = start_daemon_thread,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or SearchSettings()
        self.on_search_state_changed = on_search_state_changed
        self.query = ""
        self._last_snapshot: SearchSnapshot | None = None
        self._disposed = False
        self.selection = ResultSelectionModel(on_change=self._emit_search_state)
        self.sequencer = QuerySequencer(
            client.search,
            self.selection,
            settings=self.settings,
            on_change=self._emit_search_state,
            run_job=run_job,
            clock=clock,
        )
        self.debounce = DebounceScheduler(
            self.sequencer.trigger,
            delay_seconds=self.settings.debounce_seconds,
            clock=clock,
        )
        self.dispatcher = SelectionDispatcher(
            client.list_dependents,
            on_selection_committed=on_selection_committed,
            on_state_changed=on_dependent_load_state_changed,
            run_job=run_job,
        )

    # state publication
    def snapshot(self) -> SearchSnapshot:
        return SearchSnapshot(
            query=self.query,
            candidates=self.selection.candidates,
            loading=self.sequencer.loading,
            error=self.sequencer.error,
            focus_index=self.selection.focus_index,
            input_owner=self.selection.input_owner,
            searched_query=self.sequencer.searched_query,
        )

    def _emit_search_state(self) -> None:
        snapshot = self.snapshot()
        if snapshot == self._last_snapshot:
            return
        self._last_snapshot = snapshot
        if self.on_search_state_changed is not None:
            self.on_search_state_changed(snapshot)

    @property
    def selected(self) -> UserCandidate | None:
        return self.dispatcher.selected

    @property
    def dependent_state(self) -> DependentLoadState:
        return self.dispatcher.load_state

    # query editing
    def set_query(self, text: str) -> None:
        """Replace query text and (re)arm the debounce timer."""
        if self._disposed:
            return
        self.query = text
        self.debounce.on_input_changed(text)
        self._emit_search_state()

    def clear_query(self) -> None:
        self.set_query("")

    def escape(self) -> None:
        """Clear query and focus, returning input to the query field."""
        self.selection.reset_focus()
        self.set_query("")

    # pointer and focus events
    def item_focused(self, index: int) -> bool:
        return self.selection.item_focused(index)

    def item_blurred(self, index: int) -> None:
        self.selection.item_blurred(index)

    def settle_focus(self) -> bool:
        return self.selection.settle_focus()

    def blur_results(self) -> bool:
        """Move input focus off the result list (pointer click elsewhere, Tab)."""
        focused_item = self.selection.focused_item
        if focused_item is not None:
            self.selection.item_blurred(focused_item)
        return self.selection.settle_focus()

    def item_clicked(self, index: int) -> bool:
        """Focus and commit the item at ``index``; return whether a load started."""
        if not self.selection.item_focused(index):
            return False
        return self.commit(self.selection.candidates[index])

    def commit(self, candidate: UserCandidate) -> bool:
        return self.dispatcher.commit(candidate)

    def commit_focused(self) -> bool:
        candidate = self.selection.focused_candidate
        if candidate is None:
            return False
        return self.commit(candidate)

    def retry_dependent_load(self) -> bool:
        return self.dispatcher.retry()

    # keyboard
    def handle_key(self, key: str) -> bool:
        """Apply one normalized key; return whether it was consumed."""
        if self._disposed:
            return False
        if key == "ESC":
            self.escape()
            return True
        if key == "DOWN":
            return self.selection.move_next()
        if key == "UP":
            return self.selection.move_previous()
        if key == "ENTER":
            return self.commit_focused()
        if key == "TAB":
            if self.selection.input_owner == INPUT_OWNER_RESULTS:
                self.blur_results()
                return True
            if not self.selection.candidates:
                return False
            target = self.selection.focus_index if self.selection.focus_index >= 0 else 0
            return self.selection.item_focused(target)
        if self.selection.input_owner == INPUT_OWNER_RESULTS:
            if key == " ":
                return self.commit_focused()
            if key in RETRY_KEYS and self.dispatcher.load_state.failed:
                return self.retry_dependent_load()
        if key == "CTRL_U":
            self.blur_results()
            self.clear_query()
            return True
        if key == "BACKSPACE":
            self.blur_results()
            if self.query:
                self.set_query(self.query[:-1])
            return True
        if len(key) == 1 and key.isprintable():
            self.blur_results()
            self.set_query(self.query + key)
            return True
        return False

    # host loop integration
    def next_wakeup_seconds(self) -> float | None:
        """Seconds until the pending debounce fires, if one is armed."""
        return self.debounce.seconds_until_due()

    def tick(self, now: float | None = None) -> bool:
        """Fire due debounce, apply finished requests and expire hung searches."""
        if self._disposed:
            return False
        changed = self.debounce.poll(now)
        changed = self.sequencer.poll_updates() or changed
        changed = self.sequencer.expire_overdue(now) or changed
        changed = self.dispatcher.poll_updates() or changed
        return changed

    def dispose(self) -> None:
        """Cancel the pending debounce and ignore any in-flight responses."""
        if self._disposed:
            return
        self._disposed = True
        self.debounce.cancel()
        self.sequencer.dispose()
        self.dispatcher.dispose()
        logger.debug("search controller disposed")

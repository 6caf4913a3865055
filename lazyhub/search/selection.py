"""Roving-focus selection model over the current candidate list.

``focus_index`` is the keyboard cursor (``-1`` means no focus). Separately,
the model tracks which result item currently holds input focus so a blur
can be resolved without a deferred "wait a tick" check: a blur only marks
focus loss as pending, and :meth:`ResultSelectionModel.settle_focus` clears
the cursor at the end of the logical step if no item reclaimed focus.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..directory.types import UserCandidate
from .state import INPUT_OWNER_QUERY, INPUT_OWNER_RESULTS, NO_FOCUS

logger = logging.getLogger(__name__)


class ResultSelectionModel:
    """Candidate list plus wrap-around keyboard navigation state."""

    def __init__(self, on_change: Callable[[], None] | None = None) -> None:
        self.on_change = on_change
        self.candidates: tuple[UserCandidate, ...] = ()
        self.focus_index = NO_FOCUS
        self.input_owner = INPUT_OWNER_QUERY
        self._item_focus: list[bool] = []
        self._blur_pending = False

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def _claim_item_focus(self, index: int) -> None:
        self._item_focus = [slot == index for slot in range(len(self.candidates))]
        self._blur_pending = False
        self.focus_index = index
        self.input_owner = INPUT_OWNER_RESULTS

    @property
    def focused_candidate(self) -> UserCandidate | None:
        if 0 <= self.focus_index < len(self.candidates):
            return self.candidates[self.focus_index]
        return None

    @property
    def focused_item(self) -> int | None:
        """Index of the result item that holds input focus, if any."""
        for index, has_focus in enumerate(self._item_focus):
            if has_focus:
                return index
        return None

    def replace_candidates(self, candidates: Sequence[UserCandidate]) -> None:
        """Install a new result set and drop back to ``NoFocus``."""
        self.candidates = tuple(candidates)
        self._item_focus = [False] * len(self.candidates)
        self._blur_pending = False
        self.focus_index = NO_FOCUS
        self.input_owner = INPUT_OWNER_QUERY
        self._changed()

    def reset_focus(self) -> bool:
        """Clear focus and hand input back to the query field."""
        changed = self.focus_index != NO_FOCUS or self.input_owner != INPUT_OWNER_QUERY
        self.focus_index = NO_FOCUS
        self._item_focus = [False] * len(self.candidates)
        self._blur_pending = False
        self.input_owner = INPUT_OWNER_QUERY
        if changed:
            self._changed()
        return changed

    def move_next(self) -> bool:
        count = len(self.candidates)
        if count == 0:
            return False
        self._claim_item_focus(0 if self.focus_index == NO_FOCUS else (self.focus_index + 1) % count)
        self._changed()
        return True

    def move_previous(self) -> bool:
        count = len(self.candidates)
        if count == 0:
            return False
        if self.focus_index == NO_FOCUS:
            target = count - 1
        else:
            target = (self.focus_index - 1 + count) % count
        self._claim_item_focus(target)
        self._changed()
        return True

    def item_focused(self, index: int) -> bool:
        """Sync the roving index to an item focused by pointer or program."""
        if not (0 <= index < len(self.candidates)):
            return False
        previous = (self.focus_index, self.input_owner)
        self._claim_item_focus(index)
        if (self.focus_index, self.input_owner) != previous:
            self._changed()
        return True

    def item_blurred(self, index: int) -> None:
        """Record that ``index`` lost input focus; resolved by :meth:`settle_focus`."""
        if 0 <= index < len(self._item_focus) and self._item_focus[index]:
            self._item_focus[index] = False
            self._blur_pending = True

    def settle_focus(self) -> bool:
        """Drop to ``NoFocus`` if a blur happened and no item reclaimed focus."""
        if not self._blur_pending:
            return False
        self._blur_pending = False
        if self.focused_item is not None or self.focus_index == NO_FOCUS:
            return False
        logger.debug("focus left result list; clearing roving index %d", self.focus_index)
        self.focus_index = NO_FOCUS
        self.input_owner = INPUT_OWNER_QUERY
        self._changed()
        return True

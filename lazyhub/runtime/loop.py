"""Main interactive event loop for the terminal UI.

Coordinates controller ticks, rendering, and input dispatch. All controller
state is mutated on this thread; background requests only report back
through the controller's queues.
"""

from __future__ import annotations

import logging
import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..search.controller import SearchController
from .input import parse_mouse_col_row, read_key
from .render import RenderContext, render_frame
from .state import AppState
from .terminal import TerminalController

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"CTRL_C", "CTRL_Q"})


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    idle_poll_seconds: float = 0.05
    cursor_blink_seconds: float = 0.5
    spinner_frame_seconds: float = 0.12


def handle_input(key: str, state: AppState, controller: SearchController) -> bool:
    """Dispatch one key token; return ``True`` when the session should end."""
    if key in QUIT_KEYS:
        return True
    if key.startswith("MOUSE_LEFT_DOWN:"):
        _col, row = parse_mouse_col_row(key)
        index = state.candidate_rows.get(row) if row is not None else None
        if index is None:
            controller.blur_results()
        else:
            controller.item_clicked(index)
        state.dirty = True
        return False
    if key.startswith("MOUSE"):
        return False
    if controller.handle_key(key):
        state.dirty = True
    return False


def run_main_loop(
    state: AppState,
    controller: SearchController,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    read_key_fn: Callable[[int, int | None], str] = read_key,
) -> None:
    """Run the interactive loop until a quit key is pressed."""
    cursor_visible = True
    spinner_frame = 0

    with terminal.raw_mode():
        while True:
            now = time.monotonic()
            if controller.tick(now):
                state.dirty = True

            blink_phase = (int(now / timing.cursor_blink_seconds) % 2) == 0
            if blink_phase != cursor_visible:
                cursor_visible = blink_phase
                state.dirty = True
            if state.search.loading:
                next_frame = int(now / timing.spinner_frame_seconds)
                if next_frame != spinner_frame:
                    spinner_frame = next_frame
                    state.dirty = True

            if state.dirty:
                term = shutil.get_terminal_size((80, 24))
                frame = render_frame(
                    RenderContext(
                        search=state.search,
                        dependent=state.dependent,
                        selected=state.selected,
                        width=term.columns,
                        height=term.lines,
                        spinner_frame=spinner_frame,
                        cursor_visible=cursor_visible,
                    )
                )
                state.candidate_rows = frame.candidate_rows
                terminal.write_frame(frame.text())
                state.dirty = False

            wait_seconds = timing.idle_poll_seconds
            due = controller.next_wakeup_seconds()
            if due is not None:
                wait_seconds = min(wait_seconds, due)
            key = read_key_fn(stdin_fd, int(wait_seconds * 1000))
            if not key:
                continue
            if handle_input(key, state, controller):
                logger.info("quit requested")
                return

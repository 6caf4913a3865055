"""Interactive session bootstrap: builds the controller and runs the loop."""

from __future__ import annotations

import logging
import sys

from ..directory.client import DirectoryClient
from ..search.controller import SearchController
from ..search.settings import SearchSettings
from .loop import RuntimeLoopTiming, run_main_loop
from .state import AppState
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_session(client: DirectoryClient, settings: SearchSettings) -> tuple[AppState, SearchController]:
    """Create host state and a controller whose callbacks feed it."""
    state = AppState()
    controller = SearchController(
        client,
        settings,
        on_search_state_changed=state.on_search_state_changed,
        on_selection_committed=state.on_selection_committed,
        on_dependent_load_state_changed=state.on_dependent_load_state_changed,
    )
    return state, controller


def run_app(client: DirectoryClient, settings: SearchSettings, initial_query: str = "") -> None:
    """Run the interactive search UI on the controlling terminal."""
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("lazyhub needs an interactive terminal (use --print for scripting).")

    state, controller = build_session(client, settings)
    if initial_query:
        controller.set_query(initial_query)

    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    logger.info(
        "session started (debounce=%.3fs page_size=%d)",
        settings.debounce_seconds,
        settings.page_size,
    )
    try:
        run_main_loop(state, controller, terminal, stdin_fd, RuntimeLoopTiming())
    finally:
        controller.dispose()

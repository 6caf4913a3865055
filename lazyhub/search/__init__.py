"""Incremental search core.

Keystrokes flow through :class:`DebounceScheduler` into :class:`QuerySequencer`,
results land in :class:`ResultSelectionModel`, and commits go through
:class:`SelectionDispatcher`. :class:`SearchController` wires them together.
"""

from .controller import SearchController
from .debounce import DebounceScheduler
from .dispatcher import SelectionDispatcher
from .selection import ResultSelectionModel
from .sequencer import QuerySequencer
from .settings import SearchSettings
from .state import DependentLoadState, SearchSnapshot

__all__ = [
    "DebounceScheduler",
    "DependentLoadState",
    "QuerySequencer",
    "ResultSelectionModel",
    "SearchController",
    "SearchSettings",
    "SearchSnapshot",
    "SelectionDispatcher",
]

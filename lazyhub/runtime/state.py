"""Host-side view state fed by search controller callbacks."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..directory.types import UserCandidate
from ..search.state import DependentLoadState, SearchSnapshot


@dataclass
class AppState:
    search: SearchSnapshot = field(default_factory=SearchSnapshot)
    dependent: DependentLoadState = field(default_factory=DependentLoadState)
    selected: UserCandidate | None = None
    candidate_rows: dict[int, int] = field(default_factory=dict)
    dirty: bool = True

    def on_search_state_changed(self, snapshot: SearchSnapshot) -> None:
        self.search = snapshot
        self.dirty = True

    def on_selection_committed(self, candidate: UserCandidate) -> None:
        self.selected = candidate
        self.dirty = True

    def on_dependent_load_state_changed(self, state: DependentLoadState) -> None:
        self.dependent = state
        self.dirty = True

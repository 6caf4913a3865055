"""Immutable snapshots published to the host by the search core."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..directory.types import Repository, UserCandidate

NO_FOCUS = -1

INPUT_OWNER_QUERY = "query"
INPUT_OWNER_RESULTS = "results"

LOAD_IDLE = "idle"
LOAD_LOADING = "loading"
LOAD_LOADED = "loaded"
LOAD_FAILED = "failed"

SEARCH_ERROR_MESSAGE = "Error searching users. Please try again."
SEARCH_TIMEOUT_MESSAGE = "Search timed out. Please try again."


@dataclass(frozen=True)
class SearchSnapshot:
    """Visible search state: query text, results, loading/error, roving focus."""

    query: str = ""
    candidates: tuple[UserCandidate, ...] = ()
    loading: bool = False
    error: str | None = None
    focus_index: int = NO_FOCUS
    input_owner: str = INPUT_OWNER_QUERY
    searched_query: str | None = None

    @property
    def focused_candidate(self) -> UserCandidate | None:
        if 0 <= self.focus_index < len(self.candidates):
            return self.candidates[self.focus_index]
        return None

    @property
    def shows_no_results(self) -> bool:
        """True once a finished, error-free search for the current text found nothing."""
        return bool(
            self.query.strip()
            and not self.loading
            and not self.candidates
            and self.error is None
            and self.searched_query == self.query
        )


@dataclass(frozen=True)
class DependentLoadState:
    """Lifecycle of the repository list loaded for one committed user."""

    candidate: UserCandidate | None = None
    status: str = LOAD_IDLE
    data: tuple[Repository, ...] = field(default_factory=tuple)
    error_message: str | None = None

    @property
    def failed(self) -> bool:
        return self.status == LOAD_FAILED


def dependent_load_error_message(candidate: UserCandidate) -> str:
    return f"Failed to load repositories for {candidate.login}. Please try again."

"""Construction-time tuning for the search controller."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DEBOUNCE_SECONDS = 0.5
DEFAULT_PAGE_SIZE = 5
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0
# Extra wait past the HTTP timeout before a search is declared hung.
REQUEST_DEADLINE_GRACE_SECONDS = 2.0


@dataclass(frozen=True)
class SearchSettings:
    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    page_size: int = DEFAULT_PAGE_SIZE
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS

    @property
    def search_deadline_seconds(self) -> float:
        return self.request_timeout_seconds + REQUEST_DEADLINE_GRACE_SECONDS

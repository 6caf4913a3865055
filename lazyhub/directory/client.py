"""HTTP client for the remote user directory (GitHub REST API by default).

The client is stateless apart from its base URL, auth header and timeout.
Each call is a single blocking request; callers that must stay responsive
run it on a background worker.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar
from urllib.parse import quote

import requests

from .errors import (
    DirectoryClientError,
    DirectoryNotFound,
    DirectoryRateLimited,
    DirectoryServerError,
)
from .types import Repository, UserCandidate

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.github.com"
DEFAULT_TIMEOUT_SECONDS = 10.0
ACCEPT_HEADER = "application/vnd.github+json"

T = TypeVar("T")


class DirectoryClient:
    """Query users and their repositories from the directory service."""

    SEARCH_EP = "/search/users"
    USER_EP = "/users/{login}"
    REPOS_EP = "/users/{login}/repos"

    def __init__(
        self,
        baseurl: str = DEFAULT_API_BASE,
        *,
        token: str | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.baseurl = baseurl.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._headers = {"Accept": ACCEPT_HEADER}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    def _get(self, relurl: str, params: dict[str, object] | None = None) -> object:
        if not relurl.startswith("/"):
            relurl = "/" + relurl

        try:
            resp = requests.get(
                self.baseurl + relurl,
                headers=self._headers,
                params=params,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as ex:
            logger.warning("directory request %s failed: %s", relurl, ex)
            raise DirectoryServerError(relurl, cause=ex) from ex

        status = resp.status_code
        if status >= 500:
            raise DirectoryServerError(relurl, status, resp.reason)
        if status == 404:
            raise DirectoryNotFound(relurl, resp.reason)
        if status in (403, 429) and resp.headers.get("X-RateLimit-Remaining") == "0":
            reset = resp.headers.get("X-RateLimit-Reset")
            raise DirectoryRateLimited(
                relurl,
                status,
                resp.reason,
                reset_at=int(reset) if reset and reset.isdigit() else None,
            )
        if status >= 400:
            raise DirectoryClientError(relurl, status, resp.reason)
        if status != 200:
            raise DirectoryServerError(
                relurl,
                status,
                resp.reason,
                message=f"Unexpected response from server: {status} {resp.reason}",
            )

        try:
            return resp.json()
        except ValueError as ex:
            raise DirectoryServerError(
                relurl,
                message="Unable to parse response as JSON (is the service URL correct?)",
                cause=ex,
            ) from ex

    def search(self, query: str, limit: int) -> list[UserCandidate]:
        """Return up to ``limit`` users matching ``query``.

        A blank query short-circuits to an empty list without a request.
        """
        if not query.strip():
            return []
        data = self._get(self.SEARCH_EP, params={"q": query, "per_page": limit})
        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise DirectoryServerError(self.SEARCH_EP, message="Search response has no item list")
        return _decode_records(self.SEARCH_EP, data["items"], UserCandidate.from_json)

    def list_dependents(self, login: str) -> list[Repository]:
        """Return ``login``'s repositories, most recently updated first."""
        relurl = self.REPOS_EP.format(login=quote(login, safe=""))
        data = self._get(relurl, params={"sort": "updated", "direction": "desc"})
        if not isinstance(data, list):
            raise DirectoryServerError(relurl, message="Repository response is not a list")
        return _decode_records(relurl, data, Repository.from_json)

    def get_user(self, login: str) -> UserCandidate:
        """Return the full profile for ``login``."""
        relurl = self.USER_EP.format(login=quote(login, safe=""))
        data = self._get(relurl)
        if not isinstance(data, dict):
            raise DirectoryServerError(relurl, message="User response is not an object")
        try:
            return UserCandidate.from_json(data)
        except ValueError as ex:
            raise DirectoryServerError(relurl, message="Unexpected record in response", cause=ex) from ex


def _decode_records(relurl: str, items: list[object], decode: Callable[[dict], T]) -> list[T]:
    """Decode list items, skipping (and logging) records that are malformed."""
    records: list[T] = []
    for item in items:
        if not isinstance(item, dict):
            logger.warning("skipping non-object record from %s: %r", relurl, item)
            continue
        try:
            records.append(decode(item))
        except ValueError as ex:
            logger.warning("skipping malformed record from %s: %s", relurl, ex)
    return records

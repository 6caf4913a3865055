"""Typed records returned by the directory client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime


def _str_or_none(value: object) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _nonnegative_int(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(0, value)


@dataclass(frozen=True)
class UserCandidate:
    """One user matching an incremental search.

    ``id`` is the stable identity used by the duplicate-fetch guard; ``login``
    is the primary label and the key for dependent loads.
    """

    id: int
    login: str
    avatar_url: str = ""
    html_url: str = ""
    name: str | None = None
    bio: str | None = None
    company: str | None = None
    location: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0

    @property
    def label(self) -> str:
        if self.name:
            return f"{self.login} ({self.name})"
        return self.login

    @classmethod
    def from_json(cls, data: Mapping[str, object]) -> UserCandidate:
        """Build a candidate from one search item or user-profile payload."""
        raw_id = data.get("id")
        login = data.get("login")
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise ValueError(f"user record without integer id: {data!r}")
        if not isinstance(login, str) or not login:
            raise ValueError(f"user record without login: {data!r}")
        return cls(
            id=raw_id,
            login=login,
            avatar_url=_str_or_none(data.get("avatar_url")) or "",
            html_url=_str_or_none(data.get("html_url")) or "",
            name=_str_or_none(data.get("name")),
            bio=_str_or_none(data.get("bio")),
            company=_str_or_none(data.get("company")),
            location=_str_or_none(data.get("location")),
            public_repos=_nonnegative_int(data.get("public_repos")),
            followers=_nonnegative_int(data.get("followers")),
            following=_nonnegative_int(data.get("following")),
        )

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "login": self.login,
            "avatar_url": self.avatar_url,
            "html_url": self.html_url,
            "name": self.name,
            "bio": self.bio,
            "company": self.company,
            "location": self.location,
            "public_repos": self.public_repos,
            "followers": self.followers,
            "following": self.following,
        }


@dataclass(frozen=True)
class Repository:
    """One repository owned by a committed user."""

    id: int
    name: str
    full_name: str = ""
    description: str | None = None
    html_url: str = ""
    stargazers_count: int = 0
    forks_count: int = 0
    language: str | None = None
    updated_at: str = ""
    private: bool = False

    @classmethod
    def from_json(cls, data: Mapping[str, object]) -> Repository:
        raw_id = data.get("id")
        name = data.get("name")
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise ValueError(f"repository record without integer id: {data!r}")
        if not isinstance(name, str) or not name:
            raise ValueError(f"repository record without name: {data!r}")
        return cls(
            id=raw_id,
            name=name,
            full_name=_str_or_none(data.get("full_name")) or name,
            description=_str_or_none(data.get("description")),
            html_url=_str_or_none(data.get("html_url")) or "",
            stargazers_count=_nonnegative_int(data.get("stargazers_count")),
            forks_count=_nonnegative_int(data.get("forks_count")),
            language=_str_or_none(data.get("language")),
            updated_at=_str_or_none(data.get("updated_at")) or "",
            private=data.get("private") is True,
        )

    def updated_date(self) -> str:
        """Return ``updated_at`` as ``YYYY-MM-DD``, or the raw text if unparsable."""
        if not self.updated_at:
            return ""
        try:
            parsed = datetime.fromisoformat(self.updated_at.replace("Z", "+00:00"))
        except ValueError:
            return self.updated_at
        return parsed.date().isoformat()

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "full_name": self.full_name,
            "description": self.description,
            "html_url": self.html_url,
            "stargazers_count": self.stargazers_count,
            "forks_count": self.forks_count,
            "language": self.language,
            "updated_at": self.updated_at,
            "private": self.private,
        }

"""Remote directory access: HTTP client, typed records, and errors."""

from .client import DEFAULT_API_BASE, DEFAULT_TIMEOUT_SECONDS, DirectoryClient
from .errors import (
    DirectoryClientError,
    DirectoryError,
    DirectoryNotFound,
    DirectoryRateLimited,
    DirectoryServerError,
    DirectoryServiceError,
)
from .types import Repository, UserCandidate

__all__ = [
    "DEFAULT_API_BASE",
    "DEFAULT_TIMEOUT_SECONDS",
    "DirectoryClient",
    "DirectoryClientError",
    "DirectoryError",
    "DirectoryNotFound",
    "DirectoryRateLimited",
    "DirectoryServerError",
    "DirectoryServiceError",
    "Repository",
    "UserCandidate",
]

"""Exception hierarchy for remote directory access.

Every failure raised by :class:`~lazyhub.directory.client.DirectoryClient`
derives from :class:`DirectoryError`, so background workers can convert any
transport or status problem into visible state with one ``except`` clause.
"""

from __future__ import annotations


class DirectoryError(Exception):
    """General base class for failures while talking to the remote directory."""


class DirectoryServiceError(DirectoryError):
    """A problem using the directory service.

    Carries the requested ``resource`` path plus the HTTP ``status`` code and
    ``reason`` phrase when a response was received.
    """

    def __init__(
        self,
        resource: str | None = None,
        status: int | None = None,
        reason: str | None = None,
        message: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        if not message:
            if resource:
                message = f"Trouble accessing {resource} from the directory service"
            else:
                message = "Problem accessing the directory service"
            if status or reason:
                message += ":"
                if status:
                    message += f" {status}"
                if reason:
                    message += f" {reason}"
            elif cause:
                message += f": {cause}"

        super().__init__(message)
        self.resource = resource
        self.status = status
        self.reason = reason
        self.cause = cause


class DirectoryServerError(DirectoryServiceError):
    """Server-side or transport failure (5xx, connection trouble, bad JSON)."""


class DirectoryClientError(DirectoryServiceError):
    """Request rejected by the service (4xx)."""

    def __init__(
        self,
        resource: str | None,
        status: int | None,
        reason: str | None,
        message: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        if not message:
            message = "client-side directory error occurred"
            if resource:
                message += f" while requesting {resource}"
            message += f": {status} {reason or ''}".rstrip()
        super().__init__(resource, status, reason, message, cause)


class DirectoryNotFound(DirectoryClientError):
    """The requested user or resource does not exist."""

    def __init__(
        self,
        resource: str | None,
        reason: str | None = None,
        message: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        if not message:
            message = "Requested directory resource not found"
            if resource:
                message += f": {resource}"
        super().__init__(resource, 404, reason, message, cause)


class DirectoryRateLimited(DirectoryClientError):
    """The service refused the request because the rate limit is exhausted."""

    def __init__(
        self,
        resource: str | None,
        status: int | None,
        reason: str | None = None,
        reset_at: int | None = None,
    ) -> None:
        message = "Directory rate limit exceeded"
        if reset_at:
            message += f" (resets at epoch {reset_at})"
        super().__init__(resource, status, reason, message)
        self.reset_at = reset_at

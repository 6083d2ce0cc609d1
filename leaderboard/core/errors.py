"""Domain error taxonomy shared by storage, services and the API layer."""

from __future__ import annotations


class LeaderboardError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(LeaderboardError):
    """Malformed or missing required input."""

    status_code = 400


class InvalidRequest(ValidationError):
    """A request parameter such as a user id could not be parsed."""


class NotFound(LeaderboardError):
    """A referenced user does not exist."""

    status_code = 404


class BackendUnavailable(LeaderboardError):
    """The persistent store could not be reached at startup.

    Only the storage selector handles this; it is never sent to clients.
    """

    status_code = 503


__all__ = [
    "BackendUnavailable",
    "InvalidRequest",
    "LeaderboardError",
    "NotFound",
    "ValidationError",
]

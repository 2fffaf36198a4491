"""Typed exceptions for directory API operations."""
from __future__ import annotations

from ..messages import ERRORS


class DirectoryError(Exception):
    """Base exception for all directory operations."""
    pass


class ApiError(DirectoryError):
    """Classified transport failure carrying a user-facing message.

    Attributes:
        kind: Short failure kind ("timeout", "network", "server", "unknown")
        message: Message suitable for display
    """

    kind = "unknown"
    default_message = ERRORS.UNKNOWN_ERROR

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class RequestTimeoutError(ApiError):
    """Request exceeded the configured timeout and was aborted."""
    kind = "timeout"
    default_message = ERRORS.TIMEOUT_ERROR


class NetworkError(ApiError):
    """Backing API could not be reached."""
    kind = "network"
    default_message = ERRORS.NETWORK_ERROR


class ServerError(ApiError):
    """Backing API answered with a 5xx status."""
    kind = "server"
    default_message = ERRORS.SERVER_ERROR


class UnknownError(ApiError):
    """Any other failure after retries were exhausted."""
    kind = "unknown"
    default_message = ERRORS.UNKNOWN_ERROR


class HttpStatusError(DirectoryError):
    """Non-2xx answer from the backing API for a single attempt.

    Attributes:
        status_code: HTTP status code
        reason: Reason phrase or response text
        url: Requested URL
    """

    def __init__(self, status_code: int, reason: str, url: str):
        self.status_code = status_code
        self.reason = reason
        self.url = url
        super().__init__(f"HTTP {status_code}: {reason} ({url})")


class UserOperationError(DirectoryError):
    """Mutation failure with the transport details hidden behind a domain message."""

    default_message = ERRORS.UNKNOWN_ERROR

    def __init__(self, message: str | None = None, user_id=None):
        self.message = message or self.default_message
        self.user_id = user_id
        super().__init__(self.message)


class CreateError(UserOperationError):
    default_message = ERRORS.CREATE_ERROR


class UpdateError(UserOperationError):
    default_message = ERRORS.UPDATE_ERROR


class DeleteError(UserOperationError):
    default_message = ERRORS.DELETE_ERROR


class UserNotFoundError(DirectoryError):
    """Lookup by id found no user."""

    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__(f"{ERRORS.USER_NOT_FOUND} (id={user_id})")

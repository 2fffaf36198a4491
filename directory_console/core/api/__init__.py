"""Directory REST API client library.

Architecture:
- client.py: HTTP client with timeout, retry and error classification
- retry.py: Bounded retry combinator with linear backoff
- users.py: ``/users`` resource operations (list, get, create, update, delete)
- exceptions.py: Typed exceptions for error handling

Usage:
    from directory_console.core.api import ApiClient, UsersApi

    client = ApiClient("https://jsonplaceholder.typicode.com")
    users_api = UsersApi(client)
    users = users_api.get_users()
"""
from .client import ApiClient, REQUEST_TIMEOUT, RETRY_ATTEMPTS, RETRY_DELAY
from .exceptions import (
    DirectoryError,
    ApiError,
    RequestTimeoutError,
    NetworkError,
    ServerError,
    UnknownError,
    HttpStatusError,
    UserOperationError,
    CreateError,
    UpdateError,
    DeleteError,
    UserNotFoundError,
)
from .retry import RetryOutcome, call_with_retry, linear_backoff
from .users import UsersApi

__all__ = [
    # Client
    "ApiClient",
    "REQUEST_TIMEOUT",
    "RETRY_ATTEMPTS",
    "RETRY_DELAY",

    # Retry
    "RetryOutcome",
    "call_with_retry",
    "linear_backoff",

    # Services
    "UsersApi",

    # Exceptions
    "DirectoryError",
    "ApiError",
    "RequestTimeoutError",
    "NetworkError",
    "ServerError",
    "UnknownError",
    "HttpStatusError",
    "UserOperationError",
    "CreateError",
    "UpdateError",
    "DeleteError",
    "UserNotFoundError",
]

"""Low-level HTTP client for the directory REST API.

Handles timeouts, retries with linear backoff, and error classification.
"""
from __future__ import annotations
import logging
import re
import time
from typing import Any, Callable, Optional

import requests

from ...config.settings import AppConfig
from .exceptions import (
    ApiError,
    HttpStatusError,
    NetworkError,
    RequestTimeoutError,
    ServerError,
    UnknownError,
)
from .retry import call_with_retry, linear_backoff

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10
RETRY_ATTEMPTS = 3
RETRY_DELAY = 1.0

_NETWORK_MARKERS = ("Failed to fetch", "NetworkError")
_SERVER_STATUS_PATTERN = re.compile(r"\b5\d\d\b")


class ApiClient:
    """HTTP client for the directory API with bounded retries.

    Features:
    - Fixed per-request timeout; a timeout is never retried
    - Linear backoff between attempts (``retry_delay * attempt``)
    - Every failure surfaces as one ``ApiError`` subclass

    Usage:
        client = ApiClient("https://jsonplaceholder.typicode.com")
        users = client.get("/users")
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = REQUEST_TIMEOUT,
        retry_attempts: int = RETRY_ATTEMPTS,
        retry_delay: float = RETRY_DELAY,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the client.

        Args:
            base_url: API base URL, without trailing slash
            timeout: Request timeout in seconds
            retry_attempts: Total attempts per request
            retry_delay: Base backoff delay in seconds
            session: Optional pre-configured requests session
            sleep: Delay function used between attempts
        """
        if retry_attempts < 1:
            raise ValueError("retry_attempts must be at least 1")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay
        self.session = session or requests.Session()
        self._sleep = sleep

    @classmethod
    def from_settings(cls, config: AppConfig, **kwargs) -> "ApiClient":
        """Build a client from application settings."""
        return cls(
            config.api_base_url,
            timeout=config.request_timeout,
            retry_attempts=config.retry_attempts,
            retry_delay=config.retry_delay,
            **kwargs,
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def request(self, method: str, path: str, body: Any = None) -> Any:
        """Execute a request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: API endpoint path (e.g., "/users/1")
            body: JSON-serializable payload

        Returns:
            Decoded JSON value, or None for an empty body

        Raises:
            RequestTimeoutError: Request timed out (not retried)
            NetworkError: API unreachable after all attempts
            ServerError: API kept answering 5xx
            UnknownError: Any other failure
        """
        url = f"{self.base_url}{path}"

        def attempt() -> Any:
            return self._send(method, url, body)

        outcome = call_with_retry(
            attempt,
            attempts=self.retry_attempts,
            backoff=linear_backoff(self.retry_delay),
            give_up_on=(requests.Timeout,),
            sleep=self._sleep,
        )
        if outcome.ok:
            return outcome.value

        error = self.classify_error(outcome.error)
        logger.error(f"{method} {url} failed after {outcome.attempts} attempt(s): {outcome.error}")
        raise error from outcome.error

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, data: Any) -> Any:
        return self.request("POST", path, data)

    def put(self, path: str, data: Any) -> Any:
        return self.request("PUT", path, data)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def _send(self, method: str, url: str, body: Any) -> Any:
        """Perform a single attempt."""
        resp = self.session.request(
            method,
            url,
            json=body,
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        self._handle_error(resp)
        if not resp.content:
            return None
        return resp.json()

    def _handle_error(self, resp: requests.Response) -> None:
        """Raise HttpStatusError for any non-2xx status."""
        if not 200 <= resp.status_code < 300:
            raise HttpStatusError(resp.status_code, resp.reason or resp.text, resp.url)

    @staticmethod
    def classify_error(error: Optional[BaseException]) -> ApiError:
        """Map the last attempt's error onto the transport taxonomy."""
        if isinstance(error, ApiError):
            return error
        if isinstance(error, requests.Timeout):
            return RequestTimeoutError()
        if isinstance(error, requests.ConnectionError):
            return NetworkError()
        if isinstance(error, HttpStatusError):
            if 500 <= error.status_code < 600:
                return ServerError()
            return UnknownError()

        text = str(error) if error is not None else ""
        if any(marker in text for marker in _NETWORK_MARKERS):
            return NetworkError()
        if _SERVER_STATUS_PATTERN.search(text):
            return ServerError()
        return UnknownError()

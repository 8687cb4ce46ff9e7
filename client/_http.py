"""Internal HTTP handling for the IDE client.

Provides the sync and async transports shared by every sub-client:
response parsing, mapping error statuses to client exceptions, and optional
retry with exponential backoff on transient failures.

This is an internal module and should not be imported directly by users.
"""

import asyncio
import time
from typing import Any, Literal

import httpx

from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

# Status codes that trigger automatic retry (when retry is enabled)
RETRYABLE_STATUS_CODES = {502, 503, 504}

DEFAULT_RETRY_BACKOFF_BASE = 0.5  # seconds
DEFAULT_RETRY_BACKOFF_MAX = 30.0  # seconds

# Body keys that are part of the error envelope rather than details
_ENVELOPE_KEYS = {"error", "detail", "type"}


def _parse_error_response(response: httpx.Response) -> tuple[str, str | None, dict | None]:
    """Extract (message, error_type, details) from an error response.

    Understands the server's ``{"error", "detail", "type", ...}`` envelope and
    FastAPI's default request validation format (``detail`` as a list).
    Falls back to the raw text when the body is not JSON.
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return (text or f"HTTP {response.status_code} error"), None, None

    if not isinstance(body, dict):
        return str(body), None, None

    detail = body.get("detail")
    if isinstance(detail, list):
        messages = [
            f"{err.get('loc', ['unknown'])[-1]}: {err.get('msg', 'invalid')}"
            for err in detail
        ]
        return "; ".join(messages), "validation_error", {"errors": detail}

    extra = {k: v for k, v in body.items() if k not in _ENVELOPE_KEYS} or None
    if isinstance(detail, str):
        return detail, body.get("type"), extra
    if "error" in body:
        return str(body["error"]), body.get("type"), extra
    return str(body), None, None


def _raise_for_status(response: httpx.Response) -> None:
    """Raise the client exception matching an error status code.

    Raises:
        ValidationError: For HTTP 422 responses.
        NotFoundError: For HTTP 404 responses.
        ConflictError: For HTTP 409 responses.
        ServerError: For HTTP 5xx responses.
        APIError: For other HTTP 4xx responses.
    """
    if response.is_success:
        return

    message, error_type, details = _parse_error_response(response)
    try:
        response_body = response.json()
    except ValueError:
        response_body = response.text

    status_code = response.status_code
    if status_code == 422:
        raise ValidationError(message, details=details, response_body=response_body)
    if status_code == 404:
        raise NotFoundError(message, error_type, details, response_body)
    if status_code == 409:
        raise ConflictError(message, error_type, details, response_body)
    if status_code >= 500:
        raise ServerError(message, status_code, error_type, details, response_body)
    raise APIError(message, status_code, error_type, details, response_body)


def _calculate_backoff(attempt: int, base: float = DEFAULT_RETRY_BACKOFF_BASE) -> float:
    """Return the delay before retry ``attempt`` (0-indexed): base * 2^attempt, capped."""
    return min(base * (2 ** attempt), DEFAULT_RETRY_BACKOFF_MAX)


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if not params:
        return params
    return {k: v for k, v in params.items() if v is not None}


def _parse_body(response: httpx.Response) -> Any:
    if response.content:
        return response.json()
    return None


class _RetryPolicy:
    """Decides whether a failed attempt should be retried."""

    def __init__(self, base_url: str, timeout: float, retry_enabled: bool, max_retries: int):
        self.base_url = base_url
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

    @property
    def attempts(self) -> int:
        return self.max_retries + 1 if self.retry_enabled else 1

    def should_retry_status(self, response: httpx.Response, attempt: int) -> bool:
        return (
            self.retry_enabled
            and response.status_code in RETRYABLE_STATUS_CODES
            and attempt < self.attempts - 1
        )

    def translate(self, exc: httpx.HTTPError, path: str) -> Exception:
        url = f"{self.base_url}{path}"
        if isinstance(exc, httpx.TimeoutException):
            return TimeoutError(f"Request to {url} timed out", timeout=self.timeout, url=url)
        return ConnectionError(f"Failed to connect to {url}", url=url, cause=exc)

    def is_last(self, attempt: int) -> bool:
        return not self.retry_enabled or attempt >= self.attempts - 1


class HTTPClient:
    """Synchronous HTTP client wrapping ``httpx.Client``.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries
        self._policy = _RetryPolicy(self.base_url, timeout, retry_enabled, max_retries)
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the parsed JSON body (None if empty).

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the server returns an error response.
        """
        params = _clean_params(params)
        for attempt in range(self._policy.attempts):
            try:
                response = self._client.request(method, path, params=params, json=json)
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                if self._policy.is_last(attempt):
                    raise self._policy.translate(e, path) from e
                time.sleep(_calculate_backoff(attempt))
                continue

            if self._policy.should_retry_status(response, attempt):
                time.sleep(_calculate_backoff(attempt))
                continue

            _raise_for_status(response)
            return _parse_body(response)

        raise RuntimeError("Unexpected error in request retry loop")

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return self.request("POST", path, params=params, json=json)

    def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("DELETE", path, params=params)


class AsyncHTTPClient:
    """Asynchronous HTTP client wrapping ``httpx.AsyncClient``.

    Same behavior as HTTPClient, with awaitable methods.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries
        self._policy = _RetryPolicy(self.base_url, timeout, retry_enabled, max_retries)
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the parsed JSON body (None if empty)."""
        params = _clean_params(params)
        for attempt in range(self._policy.attempts):
            try:
                response = await self._client.request(method, path, params=params, json=json)
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                if self._policy.is_last(attempt):
                    raise self._policy.translate(e, path) from e
                await asyncio.sleep(_calculate_backoff(attempt))
                continue

            if self._policy.should_retry_status(response, attempt):
                await asyncio.sleep(_calculate_backoff(attempt))
                continue

            _raise_for_status(response)
            return _parse_body(response)

        raise RuntimeError("Unexpected error in request retry loop")

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return await self.request("POST", path, params=params, json=json)

    async def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("DELETE", path, params=params)

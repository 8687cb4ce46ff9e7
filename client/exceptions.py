"""Exception hierarchy for the IDE API client.

Exception Hierarchy:
    IDEClientError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request timeout
    └── APIError - Server returned an error response
        ├── ValidationError (HTTP 422)
        ├── NotFoundError (HTTP 404)
        ├── ConflictError (HTTP 409)
        └── ServerError (HTTP 5xx)

Example:
    Handling an uninitialized repository::

        try:
            client.vcs.commit("my-dex", "Add pair contract")
        except ConflictError:
            client.vcs.init("my-dex")
"""

from typing import Any


class IDEClientError(Exception):
    """Base exception for all IDE client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConnectionError(IDEClientError):
    """Failed to connect to the IDE server.

    Attributes:
        url: The URL that failed to connect.
        cause: The underlying transport exception.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(IDEClientError):
    """Request took longer than the configured timeout.

    Attributes:
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        extras = []
        if self.timeout is not None:
            extras.append(f"timeout: {self.timeout}s")
        if self.url:
            extras.append(f"url: {self.url}")
        if not extras:
            return self.message
        return f"{self.message} ({', '.join(extras)})"


class APIError(IDEClientError):
    """Server returned an HTTP error status.

    Attributes:
        status_code: HTTP status code from the server.
        error_type: Exception name reported by the server (the "type" field).
        details: Extra structured information from the response body.
        response_body: Raw response body for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        if self.error_type:
            return f"[HTTP {self.status_code}] [{self.error_type}] {self.message}"
        return f"[HTTP {self.status_code}] {self.message}"


class ValidationError(APIError):
    """Request body or parameters failed validation (HTTP 422)."""

    def __init__(
        self,
        message: str,
        error_type: str | None = "validation_error",
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(message, 422, error_type, details, response_body)


class NotFoundError(APIError):
    """Project, path, template, branch or commit does not exist (HTTP 404)."""

    def __init__(
        self,
        message: str,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(message, 404, error_type, details, response_body)


class ConflictError(APIError):
    """Operation invalid in the current state (HTTP 409).

    Raised for version control used before ``init``, duplicate branch names,
    or writing a file where a directory exists.
    """

    def __init__(
        self,
        message: str,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(message, 409, error_type, details, response_body)


class ServerError(APIError):
    """Server-side failure (HTTP 5xx), including broken template manifests."""

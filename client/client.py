"""Main IDE client classes.

This module provides the entry points for talking to the IDE backend:
- IDEClient: Synchronous client
- AsyncIDEClient: Asynchronous client

Both expose the API through sub-client properties: ``files``, ``templates``
and ``vcs``.

Example:
    Synchronous usage::

        from client import IDEClient

        with IDEClient(base_url="http://localhost:8000") as client:
            client.templates.create_project("flash-loan", "my-loan")
            client.vcs.init("my-loan")
            client.vcs.commit("my-loan", "Scaffold from template")

    Asynchronous usage::

        from client import AsyncIDEClient

        async with AsyncIDEClient() as client:
            tree = await client.files.get_structure("my-loan")
"""

from typing import Any

from client._files import AsyncFilesClient, FilesClient
from client._http import AsyncHTTPClient, HTTPClient
from client._templates import AsyncTemplatesClient, TemplatesClient
from client._version_control import AsyncVersionControlClient, VersionControlClient
from client.models import HealthResponse


class IDEClient:
    """Synchronous client for the IDE REST API.

    Attributes:
        base_url: The base URL of the IDE server.
        timeout: Request timeout in seconds.
        retry_enabled: Whether automatic retry is enabled.
        max_retries: Maximum number of retry attempts.

    Example:
        Manual lifecycle management::

            client = IDEClient()
            try:
                print(client.files.list_projects())
            finally:
                client.close()
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the IDE client.

        Args:
            base_url: The base URL of the IDE server.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry on connection errors, timeouts
                and HTTP 502/503/504, with exponential backoff.
            max_retries: Maximum number of retry attempts when retry is enabled.
            transport: Custom HTTP transport (e.g. a test transport).
        """
        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self._files: FilesClient | None = None
        self._templates: TemplatesClient | None = None
        self._vcs: VersionControlClient | None = None

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def timeout(self) -> float:
        return self._http.timeout

    @property
    def retry_enabled(self) -> bool:
        return self._http.retry_enabled

    @property
    def max_retries(self) -> int:
        return self._http.max_retries

    def __enter__(self) -> "IDEClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release its connections."""
        self._http.close()

    def health(self) -> HealthResponse:
        """Check that the server is up."""
        return HealthResponse(**self._http.get("/health"))

    # Sub-client properties (lazy initialization)

    @property
    def files(self) -> FilesClient:
        """Project file system operations (/api/fs/*)."""
        if self._files is None:
            self._files = FilesClient(self._http)
        return self._files

    @property
    def templates(self) -> TemplatesClient:
        """Protocol template operations (/api/templates/*)."""
        if self._templates is None:
            self._templates = TemplatesClient(self._http)
        return self._templates

    @property
    def vcs(self) -> VersionControlClient:
        """Version control operations (/api/vc/*)."""
        if self._vcs is None:
            self._vcs = VersionControlClient(self._http)
        return self._vcs


class AsyncIDEClient:
    """Asynchronous client for the IDE REST API.

    Same interface as IDEClient, with awaitable methods and async context
    manager support.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        self._http = AsyncHTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self._files: AsyncFilesClient | None = None
        self._templates: AsyncTemplatesClient | None = None
        self._vcs: AsyncVersionControlClient | None = None

    @property
    def base_url(self) -> str:
        return self._http.base_url

    async def __aenter__(self) -> "AsyncIDEClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the client and release its connections."""
        await self._http.close()

    async def health(self) -> HealthResponse:
        """Check that the server is up."""
        return HealthResponse(**await self._http.get("/health"))

    @property
    def files(self) -> AsyncFilesClient:
        if self._files is None:
            self._files = AsyncFilesClient(self._http)
        return self._files

    @property
    def templates(self) -> AsyncTemplatesClient:
        if self._templates is None:
            self._templates = AsyncTemplatesClient(self._http)
        return self._templates

    @property
    def vcs(self) -> AsyncVersionControlClient:
        if self._vcs is None:
            self._vcs = AsyncVersionControlClient(self._http)
        return self._vcs

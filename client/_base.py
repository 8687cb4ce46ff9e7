"""Base classes for the IDE sub-clients.

Every sub-client shares one HTTP client owned by IDEClient/AsyncIDEClient.
Endpoints are grouped under a fixed prefix (``_BASE_PATH``) and most of them
are scoped to a project, so the bases also build project-scoped paths.

This is an internal module and should not be imported directly by users.
"""

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

if TYPE_CHECKING:
    from client._http import AsyncHTTPClient, HTTPClient


class _PathMixin:
    _BASE_PATH = ""

    def _project_path(self, project_id: str, *segments: str) -> str:
        """Build ``<_BASE_PATH>/<project_id>/<segments...>`` with escaped ids."""
        parts = [self._BASE_PATH, quote(project_id, safe="")]
        parts.extend(quote(segment, safe="") for segment in segments)
        return "/".join(parts)


class BaseClient(_PathMixin):
    """Base class for synchronous sub-clients.

    Attributes:
        _http: The shared HTTP client for making requests.
    """

    def __init__(self, http_client: "HTTPClient") -> None:
        self._http = http_client

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._http.get(path, params=params)

    def _post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return self._http.post(path, json=json, params=params)

    def _delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._http.delete(path, params=params)


class AsyncBaseClient(_PathMixin):
    """Base class for asynchronous sub-clients.

    Attributes:
        _http: The shared async HTTP client for making requests.
    """

    def __init__(self, http_client: "AsyncHTTPClient") -> None:
        self._http = http_client

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._http.get(path, params=params)

    async def _post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return await self._http.post(path, json=json, params=params)

    async def _delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._http.delete(path, params=params)

"""DeFi IDE API Client Library.

A typed Python client for the DeFi IDE backend REST API, with synchronous
and asynchronous variants.

Example:
    Synchronous usage::

        from client import IDEClient

        with IDEClient(base_url="http://localhost:8000") as client:
            client.files.write_file("my-dex", "contracts/Pair.sol", source)
            client.vcs.init("my-dex")
            client.vcs.commit("my-dex", "Add pair")

    Asynchronous usage::

        from client import AsyncIDEClient

        async with AsyncIDEClient() as client:
            templates = await client.templates.list_templates()

Exports:
    IDEClient: Synchronous client.
    AsyncIDEClient: Asynchronous client.

    Exceptions:
        IDEClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        ValidationError: Request validation failed (HTTP 422).
        NotFoundError: Resource not found (HTTP 404).
        ConflictError: State conflict (HTTP 409).
        ServerError: Server-side error (HTTP 5xx).
"""

from client._files import AsyncFilesClient, FilesClient
from client._templates import AsyncTemplatesClient, TemplatesClient
from client._version_control import AsyncVersionControlClient, VersionControlClient
from client.client import AsyncIDEClient, IDEClient
from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    IDEClientError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)
from client.models import (
    Branch,
    BranchListResponse,
    CommitResponse,
    CreateProjectResponse,
    DirectoryNode,
    FileChange,
    FileNode,
    HealthResponse,
    LoadTemplatesResponse,
    LogResponse,
    SearchResponse,
    StatusResponse,
    Template,
)

__all__ = [
    # Main clients
    "IDEClient",
    "AsyncIDEClient",
    # Sub-clients
    "FilesClient",
    "AsyncFilesClient",
    "TemplatesClient",
    "AsyncTemplatesClient",
    "VersionControlClient",
    "AsyncVersionControlClient",
    # Exceptions
    "IDEClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ServerError",
    # Models
    "Branch",
    "BranchListResponse",
    "CommitResponse",
    "CreateProjectResponse",
    "DirectoryNode",
    "FileChange",
    "FileNode",
    "HealthResponse",
    "LoadTemplatesResponse",
    "LogResponse",
    "SearchResponse",
    "StatusResponse",
    "Template",
]

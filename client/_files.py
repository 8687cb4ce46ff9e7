"""Project file system sub-client for the IDE API.

This module provides FilesClient and AsyncFilesClient for the project file
endpoints (/api/fs/*).

This is an internal module. Import from `client` instead.
"""

from typing import Literal

from client._base import AsyncBaseClient, BaseClient
from client.models import (
    DirectoryNode,
    FileContentResponse,
    FileNode,
    MessageResponse,
    ProjectListResponse,
    SearchResponse,
)

NodeKind = Literal["file", "directory"]


class FilesClient(BaseClient):
    """Synchronous client for project file endpoints (/api/fs/*).

    Example:
        with IDEClient() as client:
            client.files.write_file("my-dex", "contracts/Pair.sol", source)
            tree = client.files.get_structure("my-dex")
            hits = client.files.search("my-dex", "pragma solidity")
            print(f"{hits.total_count} files declare a pragma")
    """

    _BASE_PATH = "/api/fs"

    def list_projects(self) -> list[str]:
        """Return the ids of all projects in the workspace."""
        data = self._get(self._BASE_PATH)
        return ProjectListResponse(**data).projects

    def get_structure(self, project_id: str, path: str = ".") -> DirectoryNode:
        """Get the directory tree of a project.

        Args:
            project_id: The project to read.
            path: Directory to describe, relative to the project root.

        Returns:
            The nested directory node.

        Raises:
            NotFoundError: If the project or directory does not exist.
        """
        data = self._get(self._project_path(project_id, "structure"), params={"path": path})
        return DirectoryNode.model_validate(data)

    def create_directory(self, project_id: str, path: str) -> MessageResponse:
        """Create a directory and any missing parents."""
        data = self._post(self._project_path(project_id, "directory"), json={"path": path})
        return MessageResponse(**data)

    def write_file(self, project_id: str, path: str, content: str = "") -> FileNode:
        """Create a file or replace an existing file's content.

        Args:
            project_id: The project to write into. Created when missing.
            path: File path relative to the project root.
            content: Full text of the file.

        Returns:
            The written file node.

        Raises:
            ConflictError: If a directory exists at ``path``.
        """
        data = self._post(
            self._project_path(project_id, "file"),
            json={"path": path, "content": content},
        )
        return FileNode.model_validate(data)

    def read_file(self, project_id: str, path: str) -> str:
        """Return the content of a file."""
        data = self._get(self._project_path(project_id, "file"), params={"path": path})
        return FileContentResponse(**data).content

    def delete(self, project_id: str, path: str, type: NodeKind = "file") -> MessageResponse:
        """Delete a file, or a directory with everything below it.

        Args:
            project_id: The project to modify.
            path: Path to delete.
            type: "file" or "directory"; must match what is at ``path``.
        """
        data = self._delete(
            self._project_path(project_id, "file"),
            params={"path": path, "type": type},
        )
        return MessageResponse(**data)

    def search(self, project_id: str, query: str) -> SearchResponse:
        """Find files whose content contains ``query`` (case-sensitive)."""
        data = self._get(self._project_path(project_id, "search"), params={"query": query})
        return SearchResponse.model_validate(data)


class AsyncFilesClient(AsyncBaseClient):
    """Asynchronous client for project file endpoints (/api/fs/*).

    Example:
        async with AsyncIDEClient() as client:
            await client.files.write_file("my-dex", "README.md", "# DEX")
            content = await client.files.read_file("my-dex", "README.md")
    """

    _BASE_PATH = "/api/fs"

    async def list_projects(self) -> list[str]:
        """Return the ids of all projects in the workspace."""
        data = await self._get(self._BASE_PATH)
        return ProjectListResponse(**data).projects

    async def get_structure(self, project_id: str, path: str = ".") -> DirectoryNode:
        """Get the directory tree of a project."""
        data = await self._get(self._project_path(project_id, "structure"), params={"path": path})
        return DirectoryNode.model_validate(data)

    async def create_directory(self, project_id: str, path: str) -> MessageResponse:
        """Create a directory and any missing parents."""
        data = await self._post(self._project_path(project_id, "directory"), json={"path": path})
        return MessageResponse(**data)

    async def write_file(self, project_id: str, path: str, content: str = "") -> FileNode:
        """Create a file or replace an existing file's content."""
        data = await self._post(
            self._project_path(project_id, "file"),
            json={"path": path, "content": content},
        )
        return FileNode.model_validate(data)

    async def read_file(self, project_id: str, path: str) -> str:
        """Return the content of a file."""
        data = await self._get(self._project_path(project_id, "file"), params={"path": path})
        return FileContentResponse(**data).content

    async def delete(self, project_id: str, path: str, type: NodeKind = "file") -> MessageResponse:
        """Delete a file, or a directory with everything below it."""
        data = await self._delete(
            self._project_path(project_id, "file"),
            params={"path": path, "type": type},
        )
        return MessageResponse(**data)

    async def search(self, project_id: str, query: str) -> SearchResponse:
        """Find files whose content contains ``query`` (case-sensitive)."""
        data = await self._get(self._project_path(project_id, "search"), params={"query": query})
        return SearchResponse.model_validate(data)

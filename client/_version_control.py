"""Version control sub-client for the IDE API.

This module provides VersionControlClient and AsyncVersionControlClient for
the version control endpoints (/api/vc/*).

This is an internal module. Import from `client` instead.
"""

from client._base import AsyncBaseClient, BaseClient
from client.models import (
    Branch,
    BranchListResponse,
    CommitResponse,
    LogResponse,
    StatusResponse,
)


class VersionControlClient(BaseClient):
    """Synchronous client for version control endpoints (/api/vc/*).

    Every project must be initialized with ``init`` before any other call;
    until then the server answers with ConflictError.

    Example:
        with IDEClient() as client:
            client.vcs.init("my-dex")
            client.vcs.commit("my-dex", "Add router", author="alice")
            client.vcs.create_branch("my-dex", "feature")
            client.vcs.switch_branch("my-dex", "feature")
    """

    _BASE_PATH = "/api/vc"

    def init(self, project_id: str) -> CommitResponse:
        """Initialize version control with an empty commit on ``main``."""
        data = self._post(self._project_path(project_id, "init"))
        return CommitResponse.model_validate(data)

    def status(self, project_id: str) -> StatusResponse:
        """List uncommitted changes on the active branch."""
        data = self._get(self._project_path(project_id, "status"))
        return StatusResponse.model_validate(data)

    def commit(self, project_id: str, message: str, author: str | None = None) -> CommitResponse:
        """Record the current project tree as a new commit.

        Args:
            project_id: The project to commit.
            message: Non-empty commit message.
            author: Optional author name.

        Returns:
            The new commit with its change list.
        """
        data = self._post(
            self._project_path(project_id, "commit"),
            json={"message": message, "author": author},
        )
        return CommitResponse.model_validate(data)

    def create_branch(self, project_id: str, name: str) -> Branch:
        """Create a branch at the active branch's head."""
        data = self._post(self._project_path(project_id, "branch"), json={"name": name})
        return Branch.model_validate(data)

    def switch_branch(self, project_id: str, name: str) -> CommitResponse:
        """Switch branches; returns the head commit of ``name``."""
        data = self._post(self._project_path(project_id, "switch-branch"), json={"name": name})
        return CommitResponse.model_validate(data)

    def merge(self, project_id: str, source_branch: str) -> CommitResponse:
        """Merge ``source_branch`` into the active branch."""
        data = self._post(
            self._project_path(project_id, "merge"),
            json={"source_branch": source_branch},
        )
        return CommitResponse.model_validate(data)

    def branches(self, project_id: str) -> BranchListResponse:
        """List branches and the active one."""
        data = self._get(self._project_path(project_id, "branches"))
        return BranchListResponse.model_validate(data)

    def log(
        self,
        project_id: str,
        branch: str | None = None,
        limit: int | None = None,
    ) -> LogResponse:
        """Return commit history, newest first.

        Args:
            project_id: The project to read.
            branch: Branch to walk. Defaults to the active branch.
            limit: Maximum number of commits.
        """
        data = self._get(
            self._project_path(project_id, "log"),
            params={"branch": branch, "limit": limit},
        )
        return LogResponse.model_validate(data)

    def get_commit(self, project_id: str, commit_id: str) -> CommitResponse:
        """Get one commit by id."""
        data = self._get(self._project_path(project_id, "commits", commit_id))
        return CommitResponse.model_validate(data)


class AsyncVersionControlClient(AsyncBaseClient):
    """Asynchronous client for version control endpoints (/api/vc/*)."""

    _BASE_PATH = "/api/vc"

    async def init(self, project_id: str) -> CommitResponse:
        data = await self._post(self._project_path(project_id, "init"))
        return CommitResponse.model_validate(data)

    async def status(self, project_id: str) -> StatusResponse:
        data = await self._get(self._project_path(project_id, "status"))
        return StatusResponse.model_validate(data)

    async def commit(
        self,
        project_id: str,
        message: str,
        author: str | None = None,
    ) -> CommitResponse:
        data = await self._post(
            self._project_path(project_id, "commit"),
            json={"message": message, "author": author},
        )
        return CommitResponse.model_validate(data)

    async def create_branch(self, project_id: str, name: str) -> Branch:
        data = await self._post(self._project_path(project_id, "branch"), json={"name": name})
        return Branch.model_validate(data)

    async def switch_branch(self, project_id: str, name: str) -> CommitResponse:
        data = await self._post(
            self._project_path(project_id, "switch-branch"),
            json={"name": name},
        )
        return CommitResponse.model_validate(data)

    async def merge(self, project_id: str, source_branch: str) -> CommitResponse:
        data = await self._post(
            self._project_path(project_id, "merge"),
            json={"source_branch": source_branch},
        )
        return CommitResponse.model_validate(data)

    async def branches(self, project_id: str) -> BranchListResponse:
        data = await self._get(self._project_path(project_id, "branches"))
        return BranchListResponse.model_validate(data)

    async def log(
        self,
        project_id: str,
        branch: str | None = None,
        limit: int | None = None,
    ) -> LogResponse:
        data = await self._get(
            self._project_path(project_id, "log"),
            params={"branch": branch, "limit": limit},
        )
        return LogResponse.model_validate(data)

    async def get_commit(self, project_id: str, commit_id: str) -> CommitResponse:
        data = await self._get(self._project_path(project_id, "commits", commit_id))
        return CommitResponse.model_validate(data)

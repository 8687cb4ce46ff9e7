"""Version control endpoints.

Each project gets its own in-memory history. ``init`` must be called before
anything else; history is lost when the server restarts.
"""

from datetime import datetime

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from api.dependencies import WorkspaceDep
from api.models import ErrorResponse
from models.version_control import Branch, Commit, CommitSummary, FileChange

router = APIRouter(
    prefix="/api/vc",
    tags=["version-control"],
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)


# Request/Response Models


class CommitRequest(BaseModel):
    """Request model for creating a commit.

    Attributes:
        message: Commit description.
        author: Optional author name.
    """

    message: str = Field(..., min_length=1)
    author: str | None = None


class BranchRequest(BaseModel):
    """Request model for creating or switching branches."""

    name: str = Field(..., min_length=1)


class MergeRequest(BaseModel):
    """Request model for merging a branch into the active one."""

    source_branch: str = Field(..., min_length=1)


class CommitResponse(BaseModel):
    """A commit as returned by the API (without the full snapshot).

    Attributes:
        id: Commit identifier.
        message: Commit description.
        timestamp: Creation time.
        author: Author name, if given.
        parent_id: Previous head of the branch.
        branch: Branch the response refers to.
        changes: File-level changes relative to the parent.
        summary: Change counts by type.
    """

    id: str
    message: str
    timestamp: datetime
    author: str | None = None
    parent_id: str | None = None
    branch: str
    changes: list[FileChange]
    summary: CommitSummary


class StatusResponse(BaseModel):
    """Uncommitted changes on the active branch."""

    branch: str
    changes: list[FileChange]
    clean: bool


class BranchListResponse(BaseModel):
    """All branches and which one is active."""

    current_branch: str
    branches: list[Branch]


class LogResponse(BaseModel):
    """A branch's history, newest first."""

    branch: str
    commits: list[CommitResponse]


def _commit_response(commit: Commit, branch: str) -> CommitResponse:
    return CommitResponse(
        id=commit.id,
        message=commit.message,
        timestamp=commit.timestamp,
        author=commit.author,
        parent_id=commit.parent_id,
        branch=branch,
        changes=commit.changes,
        summary=commit.summary(),
    )


# Route Handlers


@router.post("/{project_id}/init", response_model=CommitResponse)
def init_repository(project_id: str, workspace: WorkspaceDep):
    """Initialize version control with an empty initial commit on ``main``."""
    workspace.require_project(project_id)
    vcs = workspace.version_control(project_id)
    commit = vcs.initialize()
    return _commit_response(commit, vcs.current_branch)


@router.post("/{project_id}/commit", response_model=CommitResponse)
def create_commit(project_id: str, request: CommitRequest, workspace: WorkspaceDep):
    """Record the current project tree as a new commit.

    Args:
        project_id: The project to commit.
        request: Commit message and optional author.
        workspace: The Workspace instance (injected by FastAPI).

    Returns:
        The new commit with its change list.
    """
    workspace.require_project(project_id)
    vcs = workspace.version_control(project_id)
    commit = vcs.commit(request.message, author=request.author)
    return _commit_response(commit, vcs.current_branch)


@router.post("/{project_id}/branch", response_model=Branch)
def create_branch(project_id: str, request: BranchRequest, workspace: WorkspaceDep):
    """Create a branch at the active branch's head."""
    workspace.require_project(project_id)
    return workspace.version_control(project_id).create_branch(request.name)


@router.post("/{project_id}/switch-branch", response_model=CommitResponse)
def switch_branch(project_id: str, request: BranchRequest, workspace: WorkspaceDep):
    """Switch branches, rewriting tracked files to the branch head."""
    workspace.require_project(project_id)
    vcs = workspace.version_control(project_id)
    head = vcs.switch_branch(request.name)
    return _commit_response(head, vcs.current_branch)


@router.post("/{project_id}/merge", response_model=CommitResponse)
def merge_branch(project_id: str, request: MergeRequest, workspace: WorkspaceDep):
    """Merge ``source_branch`` into the active branch.

    No conflict detection is done: the source branch's version of a file
    always wins.
    """
    workspace.require_project(project_id)
    vcs = workspace.version_control(project_id)
    commit = vcs.merge(request.source_branch)
    return _commit_response(commit, vcs.current_branch)


@router.get("/{project_id}/status", response_model=StatusResponse)
def get_status(project_id: str, workspace: WorkspaceDep):
    """List changes since the active branch's head."""
    workspace.require_project(project_id)
    vcs = workspace.version_control(project_id)
    changes = vcs.status()
    return StatusResponse(branch=vcs.current_branch, changes=changes, clean=not changes)


@router.get("/{project_id}/branches", response_model=BranchListResponse)
def list_branches(project_id: str, workspace: WorkspaceDep):
    """List branches."""
    workspace.require_project(project_id)
    vcs = workspace.version_control(project_id)
    return BranchListResponse(current_branch=vcs.current_branch, branches=vcs.list_branches())


@router.get("/{project_id}/log", response_model=LogResponse)
def get_log(
    project_id: str,
    workspace: WorkspaceDep,
    branch: str | None = Query(None, description="Branch to walk (default: active branch)"),
    limit: int | None = Query(None, ge=1, le=1000, description="Maximum commits to return"),
):
    """Return a branch's commit history, newest first."""
    workspace.require_project(project_id)
    vcs = workspace.version_control(project_id)
    branch = branch or vcs.current_branch
    commits = vcs.log(branch=branch, limit=limit)
    return LogResponse(branch=branch, commits=[_commit_response(c, branch) for c in commits])


@router.get("/{project_id}/commits/{commit_id}", response_model=CommitResponse)
def get_commit(project_id: str, commit_id: str, workspace: WorkspaceDep):
    """Return one commit."""
    workspace.require_project(project_id)
    vcs = workspace.version_control(project_id)
    return _commit_response(vcs.get_commit(commit_id), vcs.current_branch)

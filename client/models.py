"""Client response models for the IDE API client.

This module re-exports the domain models the API returns unchanged (file
nodes, templates, branches, change lists) and defines the response envelopes
that only exist at the HTTP layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field

# Re-export models shared with the API layer
from api.models import ErrorResponse, MessageResponse, ProjectListResponse, SearchResponse
from models.node import DirectoryNode, FileNode, FileSystemNode
from models.template import Template
from models.version_control import Branch, ChangeType, CommitSummary, FileChange

__all__ = [
    # Re-exported
    "Branch",
    "ChangeType",
    "CommitSummary",
    "DirectoryNode",
    "ErrorResponse",
    "FileChange",
    "FileNode",
    "FileSystemNode",
    "MessageResponse",
    "ProjectListResponse",
    "SearchResponse",
    "Template",
    # Client-specific models
    "BranchListResponse",
    "CommitResponse",
    "CreateProjectResponse",
    "FileContentResponse",
    "HealthResponse",
    "LoadTemplatesResponse",
    "LogResponse",
    "StatusResponse",
]


class FileContentResponse(BaseModel):
    """Content of one file.

    Attributes:
        path: Normalized file path.
        content: The file's text.
    """

    path: str
    content: str


class LoadTemplatesResponse(BaseModel):
    """Result of reloading templates on the server."""

    loaded: int = Field(..., description="Number of templates registered")
    categories: list[str] = Field(default_factory=list)


class CreateProjectResponse(BaseModel):
    """A project created from a template.

    Attributes:
        template_id: The template that was instantiated.
        project: Tree of the created project directory.
    """

    template_id: str
    project: FileSystemNode


class CommitResponse(BaseModel):
    """A commit as returned by the version control endpoints.

    Attributes:
        id: Commit identifier.
        message: Commit description.
        timestamp: Creation time (UTC).
        author: Author name, if given.
        parent_id: Previous head of the branch, None for the initial commit.
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
    changes: list[FileChange] = Field(default_factory=list)
    summary: CommitSummary


class StatusResponse(BaseModel):
    """Uncommitted changes on the active branch."""

    branch: str
    changes: list[FileChange]
    clean: bool


class BranchListResponse(BaseModel):
    """All branches of a project."""

    current_branch: str
    branches: list[Branch]


class LogResponse(BaseModel):
    """A branch's history, newest first."""

    branch: str
    commits: list[CommitResponse]


class HealthResponse(BaseModel):
    """Response model for the health check.

    Attributes:
        status: Health status, "healthy" when the server is up.
    """

    status: str = Field(..., description="Health status")

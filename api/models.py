"""Shared request and response models for API endpoints."""

from pydantic import BaseModel

from models.node import FileNode


class MessageResponse(BaseModel):
    """Response for actions that only report what they did.

    Attributes:
        message: Human-readable description of the result.
    """

    message: str


class ErrorResponse(BaseModel):
    """Standard error response body.

    Attributes:
        error: Error title (e.g. "Not Found").
        detail: Human-readable error message.
        type: Name of the exception that produced the error.
    """

    error: str
    detail: str
    type: str | None = None


class ProjectListResponse(BaseModel):
    """Names of the projects in the workspace."""

    projects: list[str]


class SearchResponse(BaseModel):
    """Results of a content search.

    Attributes:
        query: Echo of the search string.
        results: Matching file nodes.
        total_count: Number of matches.
    """

    query: str
    results: list[FileNode]
    total_count: int

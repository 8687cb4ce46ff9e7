"""Project file system endpoints.

These endpoints read and modify the file tree of one project, rooted at
``<projects_dir>/<project_id>``. Creating a file or directory creates the
project directory when needed; every other endpoint requires the project to
exist.
"""

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from api.dependencies import WorkspaceDep
from api.models import ErrorResponse, MessageResponse, ProjectListResponse, SearchResponse
from models.errors import NotFoundError
from models.node import DirectoryNode, FileNode, NodeType, normalize_path

router = APIRouter(
    prefix="/api/fs",
    tags=["filesystem"],
    responses={404: {"model": ErrorResponse}},
)


# Request/Response Models


class CreateDirectoryRequest(BaseModel):
    """Request model for creating a directory.

    Attributes:
        path: Directory path relative to the project root.
    """

    path: str = Field(..., min_length=1)


class WriteFileRequest(BaseModel):
    """Request model for creating or updating a file.

    Attributes:
        path: File path relative to the project root.
        content: The file's full text.
    """

    path: str = Field(..., min_length=1)
    content: str = ""


class FileContentResponse(BaseModel):
    """Response model for reading a file.

    Attributes:
        path: Normalized file path.
        content: The file's text.
    """

    path: str
    content: str


# Route Handlers


@router.get("", response_model=ProjectListResponse)
def list_projects(workspace: WorkspaceDep):
    """List every project in the workspace."""
    return ProjectListResponse(projects=workspace.list_projects())


@router.get("/{project_id}/structure", response_model=DirectoryNode)
def get_structure(
    project_id: str,
    workspace: WorkspaceDep,
    path: str = Query(".", description="Directory to describe, relative to the project root"),
):
    """Return the directory tree below ``path``.

    Args:
        project_id: The project to read.
        workspace: The Workspace instance (injected by FastAPI).
        path: Directory to describe.

    Returns:
        The nested directory node.
    """
    workspace.require_project(project_id)
    return workspace.project_fs(project_id).get_directory_structure(path)


@router.post("/{project_id}/directory", response_model=MessageResponse)
def create_directory(project_id: str, request: CreateDirectoryRequest, workspace: WorkspaceDep):
    """Create a directory (and any missing parents)."""
    node = workspace.project_fs(project_id).create_directory(request.path)
    return MessageResponse(message=f"Created directory: {node.path}")


@router.post("/{project_id}/file", response_model=FileNode)
def write_file(project_id: str, request: WriteFileRequest, workspace: WorkspaceDep):
    """Create a file, or replace the content of an existing one.

    Args:
        project_id: The project to write into.
        request: Path and content of the file.
        workspace: The Workspace instance (injected by FastAPI).

    Returns:
        The written file node. ``is_modified`` is true when an existing file
        was updated.
    """
    file_system = workspace.project_fs(project_id)
    try:
        return file_system.update_file(request.path, request.content)
    except NotFoundError:
        return file_system.create_file(request.path, request.content)


@router.get("/{project_id}/file", response_model=FileContentResponse)
def read_file(
    project_id: str,
    workspace: WorkspaceDep,
    path: str = Query(..., min_length=1),
):
    """Return the content of the file at ``path``."""
    workspace.require_project(project_id)
    content = workspace.project_fs(project_id).get_file_content(path)
    return FileContentResponse(path=normalize_path(path), content=content)


@router.delete("/{project_id}/file", response_model=MessageResponse)
def delete_path(
    project_id: str,
    workspace: WorkspaceDep,
    path: str = Query(..., min_length=1),
    node_type: NodeType = Query(NodeType.FILE, alias="type"),
):
    """Delete a file, or a directory with everything below it.

    Args:
        project_id: The project to modify.
        workspace: The Workspace instance (injected by FastAPI).
        path: Path to delete.
        node_type: "file" or "directory"; must match what is at ``path``.
    """
    workspace.require_project(project_id)
    file_system = workspace.project_fs(project_id)
    if node_type == NodeType.DIRECTORY:
        file_system.delete_directory(path)
        return MessageResponse(message=f"Deleted directory: {normalize_path(path)}")

    file_system.delete_file(path)
    return MessageResponse(message=f"Deleted file: {normalize_path(path)}")


@router.get("/{project_id}/search", response_model=SearchResponse)
def search_files(
    project_id: str,
    workspace: WorkspaceDep,
    query: str = Query(..., min_length=1),
):
    """Find files whose content contains ``query`` (case-sensitive)."""
    workspace.require_project(project_id)
    results = workspace.project_fs(project_id).search_files(query)
    return SearchResponse(query=query, results=results, total_count=len(results))

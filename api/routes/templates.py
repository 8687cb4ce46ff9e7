"""Protocol template endpoints.

These endpoints list the loaded templates, reload them from disk, and
instantiate a template as a new project in the workspace.
"""

from typing import Any

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from api.dependencies import WorkspaceDep
from api.models import ErrorResponse
from models.node import DirectoryNode, FileNode
from models.template import Template

router = APIRouter(
    prefix="/api/templates",
    tags=["templates"],
    responses={404: {"model": ErrorResponse}},
)


# Request/Response Models


class LoadTemplatesResponse(BaseModel):
    """Response model for reloading templates.

    Attributes:
        loaded: Number of templates now registered.
        categories: Categories present after the reload.
    """

    loaded: int
    categories: list[str]


class CreateProjectRequest(BaseModel):
    """Request model for instantiating a template.

    Attributes:
        project_path: Project directory to create, relative to the projects root.
        variables: Values for ``{{placeholder}}`` substitution.
    """

    project_path: str = Field(..., min_length=1)
    variables: dict[str, Any] = Field(default_factory=dict)


class CreateProjectResponse(BaseModel):
    """Response model for template instantiation.

    Attributes:
        template_id: The template that was instantiated.
        project: The created project tree.
    """

    template_id: str
    project: DirectoryNode | FileNode


# Route Handlers


@router.get("", response_model=list[Template])
def list_templates(
    workspace: WorkspaceDep,
    category: str | None = Query(None, description="Only templates in this category"),
):
    """List loaded templates, optionally filtered by category."""
    return workspace.templates.get_templates(category=category)


@router.post("", response_model=LoadTemplatesResponse)
def load_templates(workspace: WorkspaceDep):
    """Reload every template from the templates directory.

    A malformed manifest fails the whole reload and keeps the previously
    loaded templates.
    """
    loaded = workspace.templates.load_templates()
    return LoadTemplatesResponse(loaded=loaded, categories=workspace.templates.list_categories())


@router.get("/{template_id}", response_model=Template)
def get_template(template_id: str, workspace: WorkspaceDep):
    """Return one template, including its file tree."""
    return workspace.templates.get_template_by_id(template_id)


@router.post("/{template_id}/project", response_model=CreateProjectResponse)
def create_project(template_id: str, request: CreateProjectRequest, workspace: WorkspaceDep):
    """Create a new project from a template.

    Args:
        template_id: The template to instantiate.
        request: Target project path and substitution variables.
        workspace: The Workspace instance (injected by FastAPI).

    Returns:
        The created project tree.
    """
    project = workspace.templates.create_project_from_template(
        template_id,
        request.project_path,
        request.variables,
    )
    return CreateProjectResponse(template_id=template_id, project=project)

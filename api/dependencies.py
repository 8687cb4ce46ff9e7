"""Dependency injection providers for the FastAPI application.

The Workspace is created once in the application lifespan and handed to
route handlers through ``WorkspaceDep``. Tests swap in their own Workspace
with ``app.dependency_overrides[get_workspace]``.
"""

import logging
from typing import Annotated

from fastapi import Depends

from config import Settings
from models.errors import TemplateLoadError
from models.workspace import Workspace

logger = logging.getLogger(__name__)

_workspace: Workspace | None = None


def get_workspace() -> Workspace:
    """Get the shared Workspace instance.

    Returns:
        The Workspace created by ``initialize_workspace``.

    Raises:
        RuntimeError: If the workspace hasn't been initialized yet.
    """
    if _workspace is None:
        raise RuntimeError("Workspace not initialized. Call initialize_workspace() first.")
    return _workspace


def initialize_workspace(settings: Settings | None = None) -> Workspace:
    """Create the shared Workspace.

    Templates are loaded immediately when the settings ask for it. A broken
    template tree is logged rather than preventing startup; it can be fixed
    and reloaded through ``POST /api/templates``.

    Args:
        settings: Settings to use (default: read from the environment).

    Returns:
        The newly created Workspace.
    """
    global _workspace

    settings = settings or Settings.from_env()
    workspace = Workspace(settings)

    if settings.load_templates_on_startup:
        try:
            workspace.templates.load_templates()
        except TemplateLoadError as e:
            logger.warning(f"Templates not loaded at startup: {e}")

    _workspace = workspace
    return workspace


def shutdown_workspace() -> None:
    """Drop the shared Workspace (version control history goes with it)."""
    global _workspace
    _workspace = None


WorkspaceDep = Annotated[Workspace, Depends(get_workspace)]

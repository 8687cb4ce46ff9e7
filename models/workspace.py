"""Workspace: the per-project services behind the HTTP API.

One Workspace owns the shared TemplateService and lazily creates, per
project id, a DiskFileSystem rooted at ``projects_dir/<project_id>`` and the
VersionControlService working over it. Version control state lives only as
long as the Workspace does.
"""

import logging
import re

from config import Settings
from models.errors import NotFoundError
from models.filesystem import DiskFileSystem
from models.template import TemplateService
from models.version_control import VersionControlService

logger = logging.getLogger(__name__)

PROJECT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


def validate_project_id(project_id: str) -> str:
    """Check that ``project_id`` is a single safe path segment.

    Raises:
        ValueError: If the id is empty, ``.``/``..`` or has other characters.
    """
    if not PROJECT_ID_PATTERN.match(project_id) or project_id in (".", ".."):
        raise ValueError(f"Invalid project id: {project_id!r}")
    return project_id


class Workspace:
    """Owns the services for every project under ``settings.projects_dir``."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.projects_dir = settings.projects_dir.resolve()
        self.projects_dir.mkdir(parents=True, exist_ok=True)

        self.file_system = DiskFileSystem(self.projects_dir)
        self.templates = TemplateService(settings.templates_dir, self.file_system)

        self._project_fs: dict[str, DiskFileSystem] = {}
        self._version_control: dict[str, VersionControlService] = {}

    def project_fs(self, project_id: str) -> DiskFileSystem:
        """Return the file system rooted at the project's directory."""
        validate_project_id(project_id)
        if project_id not in self._project_fs:
            self._project_fs[project_id] = DiskFileSystem(self.projects_dir / project_id)
        return self._project_fs[project_id]

    def version_control(self, project_id: str) -> VersionControlService:
        """Return the project's version control service."""
        if project_id not in self._version_control:
            self._version_control[project_id] = VersionControlService(self.project_fs(project_id))
            logger.debug(f"Created version control service for project: {project_id}")
        return self._version_control[project_id]

    def require_project(self, project_id: str) -> None:
        """Raise NotFoundError unless the project directory exists."""
        validate_project_id(project_id)
        if not (self.projects_dir / project_id).is_dir():
            raise NotFoundError("project", project_id)

    def list_projects(self) -> list[str]:
        """Return the names of all project directories."""
        return sorted(p.name for p in self.projects_dir.iterdir() if p.is_dir())

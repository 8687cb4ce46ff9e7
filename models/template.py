"""Project templates.

A template is a pre-authored protocol skeleton on disk::

    <templates_dir>/<category>/<template>/template.json
    <templates_dir>/<category>/<template>/contracts/FlashLoan.sol
    ...

``template.json`` holds the manifest (id, name, description, category,
version and optional dependencies); everything else in the template
directory is the file tree copied into new projects. File contents may use
``{{variable}}`` placeholders that are filled in at instantiation time.
"""

import logging
import posixpath
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from models.errors import NotFoundError, TemplateLoadError
from models.filesystem import DiskFileSystem, FileSystemBackend, InMemoryFileSystem
from models.node import DirectoryNode, FileNode, FileSystemNode

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "template.json"

PLACEHOLDER_PATTERN = re.compile(r"\{\{(.+?)\}\}")


def render_template(text: str, variables: dict[str, Any]) -> str:
    """Substitute ``{{key}}`` placeholders in a single pass.

    Placeholders without a matching variable are left verbatim, and
    substituted values are never themselves re-scanned.

    Args:
        text: Template text.
        variables: Mapping of placeholder names to replacement values.

    Returns:
        The rendered text.
    """

    def replace(match: re.Match) -> str:
        key = match.group(1)
        if key in variables:
            return str(variables[key])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace, text)


class TemplateManifest(BaseModel):
    """Contents of a template's ``template.json``.

    Args:
        id: Unique template identifier (e.g. "flash-loan").
        name: Display name.
        description: Short description for the template gallery.
        category: Gallery category (e.g. "DeFi").
        version: Template version string.
        dependencies: Optional package name -> version requirements.
    """

    id: str
    name: str
    description: str = ""
    category: str
    version: str
    dependencies: dict[str, str] | None = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Reject empty template ids."""
        if not v or not v.strip():
            raise ValueError("id cannot be empty")
        return v


class Template(TemplateManifest):
    """A loaded template: its manifest plus the file tree to copy.

    Paths in ``files`` are relative to the template directory.
    """

    files: list[FileSystemNode] = Field(default_factory=list)


def _rebase(node: FileNode | DirectoryNode, prefix: str) -> FileNode | DirectoryNode:
    """Copy ``node`` with its path (and its children's) made relative to ``prefix``."""
    update: dict[str, Any] = {"path": posixpath.relpath(node.path, prefix)}
    if isinstance(node, DirectoryNode):
        update["children"] = [_rebase(child, prefix) for child in node.children]
    return node.model_copy(update=update)


class TemplateService:
    """Registry of templates and project instantiation.

    Args:
        templates_dir: Root of the two-level category/template hierarchy.
        file_system: File system new projects are written into.
    """

    def __init__(self, templates_dir: str | Path, file_system: FileSystemBackend):
        self.templates_dir = Path(templates_dir)
        self.file_system = file_system
        self._source = DiskFileSystem(self.templates_dir)
        self._templates: dict[str, Template] = {}

    def load_templates(self) -> int:
        """Scan the templates directory and replace the registry.

        The registry is only swapped in once every template has loaded, so a
        failure leaves the previously loaded templates in place.

        Returns:
            Number of templates loaded.

        Raises:
            TemplateLoadError: If the directory is missing, a manifest is
                missing, malformed or invalid, or two templates share an id.
        """
        if not self.templates_dir.is_dir():
            raise TemplateLoadError(str(self.templates_dir), "templates directory does not exist")

        structure = self._source.get_directory_structure(".")
        loaded: dict[str, Template] = {}

        for category in structure.children:
            if not isinstance(category, DirectoryNode):
                continue
            for template_dir in category.children:
                if not isinstance(template_dir, DirectoryNode):
                    continue
                template = self._load_template(template_dir)
                if template.id in loaded:
                    raise TemplateLoadError(template_dir.path, f"duplicate template id '{template.id}'")
                loaded[template.id] = template

        self._templates = loaded
        logger.info(f"Loaded {len(loaded)} templates from {self.templates_dir}")
        return len(loaded)

    def get_templates(self, category: str | None = None) -> list[Template]:
        """Return loaded templates, optionally only those in ``category``."""
        templates = list(self._templates.values())
        if category is not None:
            templates = [t for t in templates if t.category == category]
        return templates

    def get_template_by_id(self, template_id: str) -> Template:
        """Return a loaded template.

        Raises:
            NotFoundError: If no template with this id is registered.
        """
        template = self._templates.get(template_id)
        if template is None:
            raise NotFoundError("template", template_id)
        return template

    def list_categories(self) -> list[str]:
        """Return the sorted names of categories with at least one template."""
        return sorted({t.category for t in self._templates.values()})

    def create_project_from_template(
        self,
        template_id: str,
        project_path: str,
        variables: dict[str, Any] | None = None,
    ) -> FileNode | DirectoryNode:
        """Instantiate a template at ``project_path``.

        The project directory is created first, then the template tree is
        walked directories-first so every file's parent already exists.
        File contents go through ``render_template``.

        Args:
            template_id: Id of a loaded template.
            project_path: Where to create the project in ``file_system``.
            variables: Placeholder values.

        Returns:
            The created project root node.

        Raises:
            NotFoundError: If the template is not registered.
        """
        template = self.get_template_by_id(template_id)
        variables = variables or {}

        self.file_system.create_directory(project_path)
        for node in template.files:
            self._instantiate(node, project_path, variables)

        logger.info(f"Created project at {project_path} from template: {template_id}")
        return self.file_system.get_node(project_path)

    def _load_template(self, template_dir: DirectoryNode) -> Template:
        manifest_node = next(
            (
                child
                for child in template_dir.children
                if isinstance(child, FileNode) and child.name == MANIFEST_FILENAME
            ),
            None,
        )
        if manifest_node is None:
            raise TemplateLoadError(template_dir.path, f"missing {MANIFEST_FILENAME}")

        try:
            manifest = TemplateManifest.model_validate_json(manifest_node.content)
        except ValidationError as e:
            logger.error(f"Invalid manifest {manifest_node.path}: {e}")
            raise TemplateLoadError(manifest_node.path, str(e)) from e

        files = [
            _rebase(child, template_dir.path)
            for child in template_dir.children
            if child is not manifest_node
        ]
        return Template(**manifest.model_dump(), files=files)

    def _instantiate(
        self,
        node: FileNode | DirectoryNode,
        parent_path: str,
        variables: dict[str, Any],
    ) -> None:
        target = posixpath.join(parent_path, node.path.split("/")[-1])
        if isinstance(node, FileNode) and node.is_binary:
            logger.warning(f"Skipping binary template file: {node.path}")
            return
        if isinstance(node, DirectoryNode):
            created = self.file_system.create_directory(target)
        else:
            created = self.file_system.create_file(
                target,
                render_template(node.content, variables),
                extension=node.extension,
            )

        # In-memory trees only know their hierarchy through explicit links
        if isinstance(self.file_system, InMemoryFileSystem):
            self.file_system.add_child_to_directory(parent_path, created.path)

        if isinstance(node, DirectoryNode):
            for child in node.children:
                self._instantiate(child, target, variables)

"""Protocol template sub-client for the IDE API.

This module provides TemplatesClient and AsyncTemplatesClient for the
template endpoints (/api/templates/*).

This is an internal module. Import from `client` instead.
"""

from typing import Any
from urllib.parse import quote

from client._base import AsyncBaseClient, BaseClient
from client.models import CreateProjectResponse, LoadTemplatesResponse, Template


class TemplatesClient(BaseClient):
    """Synchronous client for template endpoints (/api/templates/*).

    Example:
        with IDEClient() as client:
            for template in client.templates.list_templates(category="DeFi"):
                print(template.id, template.name)

            client.templates.create_project(
                "flash-loan",
                "my-flash-loan",
                variables={"projectName": "My Flash Loan"},
            )
    """

    _BASE_PATH = "/api/templates"

    def list_templates(self, category: str | None = None) -> list[Template]:
        """List loaded templates, optionally only those in ``category``."""
        data = self._get(self._BASE_PATH, params={"category": category})
        return [Template.model_validate(item) for item in data]

    def reload(self) -> LoadTemplatesResponse:
        """Reload every template from the server's templates directory.

        Raises:
            ServerError: If a manifest is missing or malformed. The server
                keeps the templates it had before.
        """
        data = self._post(self._BASE_PATH)
        return LoadTemplatesResponse(**data)

    def get(self, template_id: str) -> Template:
        """Get one template, including its file tree."""
        data = self._get(f"{self._BASE_PATH}/{quote(template_id, safe='')}")
        return Template.model_validate(data)

    def create_project(
        self,
        template_id: str,
        project_path: str,
        variables: dict[str, Any] | None = None,
    ) -> CreateProjectResponse:
        """Create a project from a template.

        Args:
            template_id: The template to instantiate.
            project_path: Project directory to create, relative to the
                projects root.
            variables: Values for ``{{placeholder}}`` substitution.

        Returns:
            The template id and the created project tree.

        Raises:
            NotFoundError: If no template has ``template_id``.
        """
        data = self._post(
            f"{self._BASE_PATH}/{quote(template_id, safe='')}/project",
            json={"project_path": project_path, "variables": variables or {}},
        )
        return CreateProjectResponse.model_validate(data)


class AsyncTemplatesClient(AsyncBaseClient):
    """Asynchronous client for template endpoints (/api/templates/*)."""

    _BASE_PATH = "/api/templates"

    async def list_templates(self, category: str | None = None) -> list[Template]:
        """List loaded templates, optionally only those in ``category``."""
        data = await self._get(self._BASE_PATH, params={"category": category})
        return [Template.model_validate(item) for item in data]

    async def reload(self) -> LoadTemplatesResponse:
        """Reload every template from the server's templates directory."""
        data = await self._post(self._BASE_PATH)
        return LoadTemplatesResponse(**data)

    async def get(self, template_id: str) -> Template:
        """Get one template, including its file tree."""
        data = await self._get(f"{self._BASE_PATH}/{quote(template_id, safe='')}")
        return Template.model_validate(data)

    async def create_project(
        self,
        template_id: str,
        project_path: str,
        variables: dict[str, Any] | None = None,
    ) -> CreateProjectResponse:
        """Create a project from a template."""
        data = await self._post(
            f"{self._BASE_PATH}/{quote(template_id, safe='')}/project",
            json={"project_path": project_path, "variables": variables or {}},
        )
        return CreateProjectResponse.model_validate(data)

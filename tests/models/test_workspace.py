"""Unit tests for Workspace and project id validation."""

import pytest

from models.errors import NotFoundError
from models.workspace import Workspace, validate_project_id


class TestValidateProjectId:
    @pytest.mark.parametrize("project_id", ["my-dex", "Vault_2", "v1.0"])
    def test_accepts_single_segment(self, project_id):
        assert validate_project_id(project_id) == project_id

    @pytest.mark.parametrize("project_id", ["", ".", "..", "a/b", "../x", "a b"])
    def test_rejects_unsafe_ids(self, project_id):
        with pytest.raises(ValueError):
            validate_project_id(project_id)


class TestWorkspace:
    """Tests for per-project service wiring."""

    def test_creates_projects_dir(self, test_settings):
        workspace = Workspace(test_settings)
        assert workspace.projects_dir.is_dir()

    def test_project_services_are_cached(self, workspace):
        assert workspace.project_fs("dex") is workspace.project_fs("dex")
        assert workspace.version_control("dex") is workspace.version_control("dex")
        assert workspace.version_control("dex").file_system is workspace.project_fs("dex")

    def test_require_project(self, workspace):
        with pytest.raises(NotFoundError) as exc_info:
            workspace.require_project("dex")
        assert exc_info.value.kind == "project"

        workspace.project_fs("dex").create_file("README.md", "# DEX")
        workspace.require_project("dex")

    def test_list_projects(self, workspace):
        workspace.project_fs("b-project").create_directory("contracts")
        workspace.project_fs("a-project").create_file("README.md")

        assert workspace.list_projects() == ["a-project", "b-project"]

    def test_templates_write_into_projects_dir(self, workspace):
        workspace.templates.create_project_from_template("governance", "dao", {"quorum": 4})

        assert workspace.list_projects() == ["dao"]
        assert workspace.project_fs("dao").get_file_content("Governor.sol") == "uint256 quorum = 4;\n"

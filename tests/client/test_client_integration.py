"""Integration tests for the IDE client library.

These tests run the clients against the real FastAPI app, using a
TestClient-backed transport for the sync client and httpx's ASGITransport
for the async client. Each test gets a fresh Workspace in a temp directory.
"""

import httpx
import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport

from api.dependencies import get_workspace
from client import (
    AsyncIDEClient,
    ConflictError,
    DirectoryNode,
    IDEClient,
    NotFoundError,
    ServerError,
    ValidationError,
)
from main import app
from tests.fixtures.templates import write_template


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def use_test_workspace(workspace):
    """Route every request to the per-test Workspace."""
    app.dependency_overrides[get_workspace] = lambda: workspace
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def sync_client():
    """Create a synchronous IDE client connected to the test app."""
    test_client = TestClient(app, raise_server_exceptions=False)

    class SyncTestTransport(httpx.BaseTransport):
        def handle_request(self, request: httpx.Request) -> httpx.Response:
            response = test_client.request(
                method=request.method,
                url=str(request.url.path),
                params=dict(request.url.params) if request.url.params else None,
                content=request.content,
                headers=dict(request.headers),
            )
            return httpx.Response(
                status_code=response.status_code,
                headers=response.headers,
                content=response.content,
            )

    with IDEClient(base_url="http://test", transport=SyncTestTransport()) as client:
        yield client


@pytest.fixture
async def async_client():
    """Create an asynchronous IDE client connected to the test app."""
    transport = ASGITransport(app=app)
    async with AsyncIDEClient(base_url="http://test", transport=transport) as client:
        yield client


# =============================================================================
# Synchronous client
# =============================================================================


class TestSyncFiles:
    def test_health(self, sync_client):
        assert sync_client.health().status == "healthy"

    def test_write_read_and_structure(self, sync_client):
        node = sync_client.files.write_file("dex", "contracts/Pair.sol", "contract Pair {}")

        assert node.extension == ".sol"
        assert sync_client.files.read_file("dex", "contracts/Pair.sol") == "contract Pair {}"
        assert sync_client.files.list_projects() == ["dex"]

        tree = sync_client.files.get_structure("dex")
        assert isinstance(tree, DirectoryNode)
        assert tree.children[0].name == "contracts"

    def test_delete_and_search(self, sync_client):
        sync_client.files.write_file("dex", "contracts/Pair.sol", "contract Pair {}")
        sync_client.files.write_file("dex", "contracts/Router.sol", "contract Router {}")

        assert sync_client.files.search("dex", "Router").total_count == 1

        sync_client.files.delete("dex", "contracts", type="directory")
        with pytest.raises(NotFoundError):
            sync_client.files.read_file("dex", "contracts/Pair.sol")

    def test_create_directory(self, sync_client):
        result = sync_client.files.create_directory("dex", "lib")
        assert result.message == "Created directory: lib"

    def test_missing_project(self, sync_client):
        with pytest.raises(NotFoundError) as exc_info:
            sync_client.files.get_structure("ghost")
        assert exc_info.value.details == {"kind": "project", "key": "ghost"}


class TestSyncTemplates:
    def test_list_and_get(self, sync_client):
        ids = {t.id for t in sync_client.templates.list_templates(category="DeFi")}
        assert ids == {"flash-loan", "yield-farm"}

        template = sync_client.templates.get("flash-loan")
        assert template.version == "1.0.0"

    def test_create_project(self, sync_client):
        result = sync_client.templates.create_project(
            "yield-farm",
            "farm",
            variables={"projectName": "Farm", "rewardRate": 7},
        )

        assert result.project.path == "farm"
        assert sync_client.files.read_file("farm", "README.md") == "# Farm\n"
        assert sync_client.files.read_file("farm", "contracts/YieldFarm.sol") == "uint256 rate = 7;\n"

    def test_reload_failure(self, sync_client, templates_dir):
        write_template(templates_dir, "DeFi", "broken", None, {"A.sol": "x"})

        with pytest.raises(ServerError) as exc_info:
            sync_client.templates.reload()
        assert exc_info.value.error_type == "TemplateLoadError"


class TestSyncVersionControl:
    def test_full_workflow(self, sync_client):
        sync_client.templates.create_project("flash-loan", "loan")
        vcs = sync_client.vcs

        vcs.init("loan")
        first = vcs.commit("loan", "Scaffold", author="alice")
        assert first.summary.added == 1

        vcs.create_branch("loan", "feature")
        vcs.switch_branch("loan", "feature")
        sync_client.files.write_file("loan", "contracts/Oracle.sol", "contract Oracle {}")
        vcs.commit("loan", "Add oracle")

        vcs.switch_branch("loan", "main")
        assert vcs.status("loan").clean is True

        merge = vcs.merge("loan", "feature")
        assert merge.message == "Merge feature into main"
        assert sync_client.files.read_file("loan", "contracts/Oracle.sol") == "contract Oracle {}"

        log = vcs.log("loan")
        assert [c.message for c in log.commits][:2] == ["Merge feature into main", "Scaffold"]
        assert vcs.get_commit("loan", first.id).author == "alice"

        branches = vcs.branches("loan")
        assert branches.current_branch == "main"
        assert {b.name for b in branches.branches} == {"main", "feature"}

    def test_commit_before_init(self, sync_client):
        sync_client.files.write_file("dex", "a.sol", "x")

        with pytest.raises(ConflictError):
            sync_client.vcs.commit("dex", "m1")

    def test_empty_message(self, sync_client):
        sync_client.files.write_file("dex", "a.sol", "x")
        sync_client.vcs.init("dex")

        with pytest.raises(ValidationError):
            sync_client.vcs.commit("dex", "")


# =============================================================================
# Asynchronous client
# =============================================================================


class TestAsyncClient:
    async def test_health(self, async_client):
        assert (await async_client.health()).status == "healthy"

    async def test_files_and_version_control(self, async_client):
        await async_client.files.write_file("dex", "contracts/Pair.sol", "v1")
        await async_client.vcs.init("dex")
        await async_client.vcs.commit("dex", "m1")
        await async_client.files.write_file("dex", "contracts/Pair.sol", "v2")

        status = await async_client.vcs.status("dex")

        assert status.clean is False
        assert status.changes[0].path == "contracts/Pair.sol"
        assert status.changes[0].type == "modified"

    async def test_templates(self, async_client):
        templates = await async_client.templates.list_templates()
        assert len(templates) == 3

        result = await async_client.templates.create_project("governance", "dao", {"quorum": 10})
        assert result.template_id == "governance"
        assert await async_client.files.read_file("dao", "Governor.sol") == "uint256 quorum = 10;\n"

    async def test_not_found(self, async_client):
        with pytest.raises(NotFoundError):
            await async_client.templates.get("nope")

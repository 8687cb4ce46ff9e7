"""Unit tests for InMemoryFileSystem."""

import pytest

from models.errors import InvalidStateError, NotFoundError
from models.node import DirectoryNode, FileNode
from tests.fixtures.filesystem import SAMPLE_CONTRACTS, create_memory_fs


def build_linked_project(fs):
    """Create project/contracts/Token.sol with explicit directory links."""
    fs.create_directory("project")
    fs.create_directory("project/contracts")
    fs.create_file("project/contracts/Token.sol", "contract Token {}")
    fs.create_file("project/README.md", "# Project")
    fs.add_child_to_directory("project", "project/contracts")
    fs.add_child_to_directory("project/contracts", "project/contracts/Token.sol")
    fs.add_child_to_directory("project", "project/README.md")


# =============================================================================
# Files
# =============================================================================


class TestFiles:
    """Tests for creating, reading and editing files."""

    def test_create_then_read(self, memory_fs):
        memory_fs.create_file("contracts/Token.sol", "contract Token {}")

        assert memory_fs.get_file_content("contracts/Token.sol") == "contract Token {}"

    def test_create_derives_name_and_extension(self, memory_fs):
        node = memory_fs.create_file("contracts/Token.sol")

        assert node.name == "Token.sol"
        assert node.extension == ".sol"
        assert node.path == "contracts/Token.sol"

    def test_explicit_extension_wins(self, memory_fs):
        node = memory_fs.create_file("Makefile", extension=".mk")
        assert node.extension == ".mk"

    def test_paths_are_normalized(self, memory_fs):
        memory_fs.create_file("contracts//./Token.sol", "x")

        assert memory_fs.exists("contracts/Token.sol")
        assert memory_fs.get_file_content("./contracts/Token.sol") == "x"

    def test_overwrite_keeps_id_and_replaces_content(self, memory_fs):
        first = memory_fs.create_file("a.sol", "one")
        second = memory_fs.create_file("a.sol", "two")

        assert second.id == first.id
        assert memory_fs.get_file_content("a.sol") == "two"

    def test_create_file_over_directory_fails(self, memory_fs):
        memory_fs.create_directory("contracts")

        with pytest.raises(InvalidStateError):
            memory_fs.create_file("contracts", "x")

    def test_update_marks_modified_and_save_clears(self, memory_fs):
        memory_fs.create_file("a.sol", "one")

        updated = memory_fs.update_file("a.sol", "two")
        assert updated.is_modified is True
        assert memory_fs.get_file_content("a.sol") == "two"

        saved = memory_fs.save_file("a.sol")
        assert saved.is_modified is False

    def test_update_missing_file_fails(self, memory_fs):
        with pytest.raises(NotFoundError) as exc_info:
            memory_fs.update_file("missing.sol", "x")
        assert exc_info.value.kind == "file"
        assert exc_info.value.key == "missing.sol"

    def test_read_directory_as_file_fails(self, memory_fs):
        memory_fs.create_directory("contracts")

        with pytest.raises(NotFoundError):
            memory_fs.get_file_content("contracts")

    def test_toggle_open(self, memory_fs):
        memory_fs.create_file("a.sol")

        assert memory_fs.toggle_open("a.sol").is_open is True
        assert memory_fs.toggle_open("a.sol").is_open is False


# =============================================================================
# Directories
# =============================================================================


class TestDirectories:
    """Tests for directories and explicit tree linkage."""

    def test_create_directory_is_idempotent(self, memory_fs):
        first = memory_fs.create_directory("contracts")
        second = memory_fs.create_directory("contracts")

        assert first.id == second.id

    def test_create_directory_over_file_fails(self, memory_fs):
        memory_fs.create_file("contracts")

        with pytest.raises(InvalidStateError):
            memory_fs.create_directory("contracts")

    def test_linked_children_show_in_structure(self, memory_fs):
        build_linked_project(memory_fs)

        tree = memory_fs.get_directory_structure("project")

        assert [child.name for child in tree.children] == ["contracts", "README.md"]
        contracts = tree.children[0]
        assert isinstance(contracts, DirectoryNode)
        assert contracts.children[0].path == "project/contracts/Token.sol"

    def test_directory_contents(self, memory_fs):
        build_linked_project(memory_fs)

        contents = memory_fs.get_directory_contents("project/contracts")

        assert [node.name for node in contents] == ["Token.sol"]

    def test_add_child_twice_links_once(self, memory_fs):
        build_linked_project(memory_fs)
        memory_fs.add_child_to_directory("project", "project/README.md")

        names = [n.name for n in memory_fs.get_directory_contents("project")]
        assert names.count("README.md") == 1

    def test_add_child_outside_parent_fails(self, memory_fs):
        memory_fs.create_directory("project")
        memory_fs.create_file("other.sol")

        with pytest.raises(ValueError):
            memory_fs.add_child_to_directory("project", "other.sol")

    def test_add_child_to_missing_parent_fails(self, memory_fs):
        memory_fs.create_file("project/a.sol")

        with pytest.raises(NotFoundError):
            memory_fs.add_child_to_directory("project", "project/a.sol")

    def test_remove_child_unlinks_without_deleting(self, memory_fs):
        build_linked_project(memory_fs)

        memory_fs.remove_child_from_directory("project", "project/README.md")

        assert memory_fs.exists("project/README.md")
        assert [n.name for n in memory_fs.get_directory_contents("project")] == ["contracts"]

    def test_synthetic_root_lists_unlinked_nodes(self):
        fs = create_memory_fs(SAMPLE_CONTRACTS)

        root = fs.get_directory_structure()

        assert root.path == "."
        assert {child.path for child in root.children} == set(SAMPLE_CONTRACTS)

    def test_structure_of_missing_directory_fails(self, memory_fs):
        with pytest.raises(NotFoundError):
            memory_fs.get_directory_structure("nowhere")


# =============================================================================
# Deletion and search
# =============================================================================


class TestDeleteAndSearch:
    """Tests for cascading deletes and content search."""

    def test_delete_then_get_fails(self, memory_fs):
        memory_fs.create_file("a.sol", "x")
        memory_fs.delete_node("a.sol")

        with pytest.raises(NotFoundError):
            memory_fs.get_node("a.sol")

    def test_delete_directory_cascades(self, memory_fs):
        build_linked_project(memory_fs)

        memory_fs.delete_directory("project/contracts")

        assert not memory_fs.exists("project/contracts")
        assert not memory_fs.exists("project/contracts/Token.sol")
        assert [n.name for n in memory_fs.get_directory_contents("project")] == ["README.md"]

    def test_delete_directory_removes_unlinked_descendants(self, memory_fs):
        memory_fs.create_directory("lib")
        memory_fs.create_file("lib/Math.sol", "x")

        memory_fs.delete_node("lib")

        assert not memory_fs.exists("lib/Math.sol")

    def test_delete_missing_fails(self, memory_fs):
        with pytest.raises(NotFoundError):
            memory_fs.delete_node("missing")

    def test_delete_directory_on_file_fails(self, memory_fs):
        memory_fs.create_file("a.sol")

        with pytest.raises(InvalidStateError):
            memory_fs.delete_directory("a.sol")

    def test_delete_file_on_directory_fails(self, memory_fs):
        memory_fs.create_directory("contracts")

        with pytest.raises(InvalidStateError):
            memory_fs.delete_file("contracts")
        assert memory_fs.exists("contracts")

    def test_search_matches_content(self):
        fs = create_memory_fs(SAMPLE_CONTRACTS)

        results = fs.search_files("contract Vault")

        assert [node.path for node in results] == ["contracts/Vault.sol"]
        assert all(isinstance(node, FileNode) for node in results)

    def test_search_is_case_sensitive(self):
        fs = create_memory_fs(SAMPLE_CONTRACTS)
        assert fs.search_files("CONTRACT") == []

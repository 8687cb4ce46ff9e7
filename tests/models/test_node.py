"""Unit tests for the file system node models and path helpers."""

import pytest
from pydantic import TypeAdapter, ValidationError

from models.node import (
    DirectoryNode,
    FileNode,
    FileSystemNode,
    NodeType,
    file_extension,
    is_descendant,
    iter_files,
    node_name,
    normalize_path,
)

node_adapter = TypeAdapter(FileSystemNode)


class TestNodeModels:
    """Tests for FileNode, DirectoryNode and the tagged union."""

    def test_file_node_defaults(self):
        node = FileNode(name="Token.sol", path="contracts/Token.sol")

        assert node.type == NodeType.FILE.value
        assert node.content == ""
        assert node.is_modified is False
        assert node.is_open is False
        assert node.id

    def test_node_ids_are_unique(self):
        a = FileNode(name="a", path="a")
        b = FileNode(name="a", path="a")
        assert a.id != b.id

    def test_union_dispatches_on_type(self):
        node = node_adapter.validate_python(
            {
                "type": "directory",
                "name": "contracts",
                "path": "contracts",
                "children": [
                    {"type": "file", "name": "A.sol", "path": "contracts/A.sol", "content": "x"},
                ],
            }
        )

        assert isinstance(node, DirectoryNode)
        assert isinstance(node.children[0], FileNode)
        assert node.children[0].content == "x"

    def test_file_with_children_is_rejected(self):
        with pytest.raises(ValidationError):
            node_adapter.validate_python(
                {"type": "file", "name": "a", "path": "a", "children": []}
            )

    def test_directory_with_content_is_rejected(self):
        with pytest.raises(ValidationError):
            node_adapter.validate_python(
                {"type": "directory", "name": "d", "path": "d", "content": "nope"}
            )

    def test_unknown_type_is_rejected(self):
        with pytest.raises(ValidationError):
            node_adapter.validate_python({"type": "symlink", "name": "l", "path": "l"})

    def test_json_round_trip_keeps_tree(self):
        tree = DirectoryNode(
            name="p",
            path="p",
            children=[FileNode(name="a.sol", path="p/a.sol", content="c", extension=".sol")],
        )

        restored = DirectoryNode.model_validate_json(tree.model_dump_json())

        assert restored == tree


class TestPathHelpers:
    """Tests for path normalization and tree helpers."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("a//b/./c.sol", "a/b/c.sol"),
            ("./a", "a"),
            ("a\\b.sol", "a/b.sol"),
            ("", "."),
            (".", "."),
            ("a/b/../c", "a/c"),
        ],
    )
    def test_normalize_path(self, raw, expected):
        assert normalize_path(raw) == expected

    def test_node_name_and_extension(self):
        assert node_name("contracts/FlashLoan.sol") == "FlashLoan.sol"
        assert node_name("contracts") == "contracts"
        assert file_extension("FlashLoan.sol") == ".sol"
        assert file_extension("Makefile") == ""

    def test_is_descendant(self):
        assert is_descendant("contracts/A.sol", "contracts")
        assert is_descendant("contracts/lib/B.sol", "contracts")
        assert not is_descendant("contracts", "contracts")
        assert not is_descendant("contractsX/A.sol", "contracts")
        assert is_descendant("anything", ".")
        assert not is_descendant("../outside", ".")

    def test_iter_files_walks_depth_first(self):
        tree = DirectoryNode(
            name=".",
            path=".",
            children=[
                DirectoryNode(
                    name="contracts",
                    path="contracts",
                    children=[FileNode(name="A.sol", path="contracts/A.sol")],
                ),
                FileNode(name="README.md", path="README.md"),
            ],
        )

        assert [f.path for f in iter_files(tree)] == ["contracts/A.sol", "README.md"]

"""File system node models.

A project tree is made of two node shapes sharing a small common header:

- FileNode carries text content and an extension.
- DirectoryNode carries an ordered list of children.

FileSystemNode is the discriminated union of the two, keyed on ``type``, so a
"file with children" or a "directory with content" cannot be constructed or
deserialized.
"""

import posixpath
from enum import Enum
from typing import Annotated, Iterator, Literal, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class NodeType(str, Enum):
    """The two kinds of node in a project tree."""

    FILE = "file"
    DIRECTORY = "directory"


def generate_node_id() -> str:
    """Return a fresh opaque node identifier."""
    return uuid4().hex


class BaseNode(BaseModel):
    """Fields shared by files and directories.

    Args:
        id: Opaque identifier, assigned at creation.
        name: Last path segment.
        path: Fully-qualified key of the node within its project.
        is_open: Transient UI flag (expanded directory / open editor tab).
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(default_factory=generate_node_id)
    name: str
    path: str
    is_open: bool = False


class FileNode(BaseNode):
    """A file with text content.

    Args:
        content: The file's text.
        extension: Suffix derived from the name (e.g. ".sol"), unless supplied.
        is_modified: True after an edit that has not been saved yet.
        is_binary: True for files on disk that are not UTF-8 text; their
            content is left empty and never read or rewritten.
    """

    type: Literal["file"] = NodeType.FILE.value
    content: str = ""
    extension: str = ""
    is_modified: bool = False
    is_binary: bool = False


class DirectoryNode(BaseNode):
    """A directory; children keep insertion order."""

    type: Literal["directory"] = NodeType.DIRECTORY.value
    children: list["FileSystemNode"] = Field(default_factory=list)


FileSystemNode = Annotated[Union[FileNode, DirectoryNode], Field(discriminator="type")]

DirectoryNode.model_rebuild()


def normalize_path(path: str) -> str:
    """Normalize a project path to its canonical key form.

    Backslashes become slashes, duplicate separators and ``.`` segments are
    collapsed, and an empty path means the project root ``.``.
    """
    if not path:
        return "."
    return posixpath.normpath(path.replace("\\", "/"))


def node_name(path: str) -> str:
    """Return the last segment of ``path`` (the path itself for roots)."""
    return posixpath.basename(path.rstrip("/")) or path


def file_extension(name: str) -> str:
    """Return the suffix of ``name`` including the dot, or "" if none."""
    return posixpath.splitext(name)[1]


def is_descendant(path: str, ancestor: str) -> bool:
    """Check whether ``path`` lies strictly below ``ancestor``."""
    if path == ancestor:
        return False
    if ancestor == ".":
        return not path.startswith("/") and path != ".." and not path.startswith("../")
    return path.startswith(ancestor.rstrip("/") + "/")


def iter_files(node: FileNode | DirectoryNode) -> Iterator[FileNode]:
    """Yield every file in the tree rooted at ``node``, depth first."""
    if isinstance(node, FileNode):
        yield node
        return
    for child in node.children:
        yield from iter_files(child)

"""File system services for project trees.

Two backends implement the same FileSystemBackend contract:

- InMemoryFileSystem: an arena of nodes in a flat table keyed by path, with
  directory membership kept as ordered lists of child paths. Edits are O(1)
  lookups; nested trees are only materialized on read.
- DiskFileSystem: the same operations joined against a base directory on
  disk. Nested trees are rebuilt from the disk on every read, so node ids are
  fresh on every call.

All paths are normalized with ``normalize_path`` before use, so "a//b.sol"
and "a/./b.sol" name the same node.
"""

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path

from models.errors import InvalidStateError, NotFoundError
from models.node import (
    DirectoryNode,
    FileNode,
    file_extension,
    generate_node_id,
    is_descendant,
    iter_files,
    node_name,
    normalize_path,
)

logger = logging.getLogger(__name__)

Node = FileNode | DirectoryNode


class FileSystemBackend(ABC):
    """Operations every project file system supports."""

    @abstractmethod
    def create_file(self, path: str, content: str = "", extension: str | None = None) -> FileNode:
        """Create or overwrite the file at ``path``.

        Raises:
            InvalidStateError: If a directory exists at ``path``.
        """

    @abstractmethod
    def create_directory(self, path: str) -> DirectoryNode:
        """Create an empty directory; idempotent if it already exists.

        Raises:
            InvalidStateError: If a file exists at ``path``.
        """

    @abstractmethod
    def delete_node(self, path: str) -> None:
        """Remove a file, or a directory together with all its descendants.

        Raises:
            NotFoundError: If nothing exists at ``path``.
        """

    @abstractmethod
    def delete_file(self, path: str) -> None:
        """Remove the file at ``path``."""

    @abstractmethod
    def delete_directory(self, path: str) -> None:
        """Remove the directory at ``path`` and everything below it."""

    @abstractmethod
    def update_file(self, path: str, content: str) -> FileNode:
        """Replace a file's content and mark it modified.

        Raises:
            NotFoundError: If no file exists at ``path``.
        """

    @abstractmethod
    def save_file(self, path: str) -> FileNode:
        """Clear a file's modified flag.

        Raises:
            NotFoundError: If no file exists at ``path``.
        """

    @abstractmethod
    def get_node(self, path: str) -> Node:
        """Return the node at ``path``, directories with their children."""

    @abstractmethod
    def get_file_content(self, path: str) -> str:
        """Return a file's content.

        Raises:
            NotFoundError: If ``path`` is absent or is a directory.
            InvalidStateError: If the file on disk is not UTF-8 text.
        """

    @abstractmethod
    def get_directory_contents(self, path: str) -> list[Node]:
        """Return the children of the directory at ``path``."""

    @abstractmethod
    def get_directory_structure(self, path: str = ".") -> DirectoryNode:
        """Return the full tree below the directory at ``path``."""

    @abstractmethod
    def search_files(self, query: str) -> list[FileNode]:
        """Return every file whose content contains ``query``."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether any node exists at ``path``."""


class InMemoryFileSystem(FileSystemBackend):
    """Project tree held entirely in memory.

    Nodes are stored flat in ``_nodes``; ``_children`` maps a directory path
    to the ordered paths of the nodes linked under it. Stored DirectoryNode
    records never hold children themselves.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {}
        self._children: dict[str, list[str]] = {}

    def create_file(self, path: str, content: str = "", extension: str | None = None) -> FileNode:
        key = normalize_path(path)
        existing = self._nodes.get(key)
        if isinstance(existing, DirectoryNode):
            raise InvalidStateError(f"Cannot create file, a directory exists at: {key}")

        name = node_name(key)
        node = FileNode(
            id=existing.id if existing else generate_node_id(),
            name=name,
            path=key,
            content=content,
            extension=file_extension(name) if extension is None else extension,
            is_open=existing.is_open if existing else False,
        )
        self._nodes[key] = node
        logger.debug(f"Created file: {key}")
        return node

    def create_directory(self, path: str) -> DirectoryNode:
        key = normalize_path(path)
        existing = self._nodes.get(key)
        if isinstance(existing, FileNode):
            raise InvalidStateError(f"Cannot create directory, a file exists at: {key}")
        if existing is None:
            self._nodes[key] = DirectoryNode(name=node_name(key), path=key)
            self._children[key] = []
            logger.debug(f"Created directory: {key}")
        return self._materialize(key)

    def delete_node(self, path: str) -> None:
        key = normalize_path(path)
        if key not in self._nodes:
            raise NotFoundError("path", key)

        doomed = {key} | self._linked_descendants(key)
        doomed.update(p for p in self._nodes if is_descendant(p, key))

        for doomed_path in doomed:
            self._nodes.pop(doomed_path, None)
            self._children.pop(doomed_path, None)
        for parent_path, child_paths in self._children.items():
            self._children[parent_path] = [p for p in child_paths if p not in doomed]

        logger.debug(f"Deleted {len(doomed)} node(s) at: {key}")

    def delete_file(self, path: str) -> None:
        key = normalize_path(path)
        node = self._nodes.get(key)
        if node is None:
            raise NotFoundError("file", key)
        if not isinstance(node, FileNode):
            raise InvalidStateError(f"Not a file: {key}")
        self.delete_node(key)

    def delete_directory(self, path: str) -> None:
        key = normalize_path(path)
        node = self._nodes.get(key)
        if node is None:
            raise NotFoundError("directory", key)
        if not isinstance(node, DirectoryNode):
            raise InvalidStateError(f"Not a directory: {key}")
        self.delete_node(key)

    def update_file(self, path: str, content: str) -> FileNode:
        node = self._require_file(path)
        node.content = content
        node.is_modified = True
        return node

    def save_file(self, path: str) -> FileNode:
        node = self._require_file(path)
        node.is_modified = False
        return node

    def toggle_open(self, path: str) -> Node:
        """Flip the ``is_open`` flag of a file or directory."""
        key = normalize_path(path)
        node = self._nodes.get(key)
        if node is None:
            raise NotFoundError("path", key)
        node.is_open = not node.is_open
        return self._materialize(key)

    def get_node(self, path: str) -> Node:
        key = normalize_path(path)
        if key not in self._nodes:
            raise NotFoundError("path", key)
        return self._materialize(key)

    def get_file_content(self, path: str) -> str:
        return self._require_file(path).content

    def get_directory_contents(self, path: str) -> list[Node]:
        key = self._require_directory(path)
        return [self._materialize(child) for child in self._children[key]]

    def get_directory_structure(self, path: str = ".") -> DirectoryNode:
        key = normalize_path(path)
        if key == "." and key not in self._nodes:
            # Synthetic root: every node not linked under a directory
            linked = {child for children in self._children.values() for child in children}
            return DirectoryNode(
                name=".",
                path=".",
                children=[self._materialize(p) for p in self._nodes if p not in linked],
            )
        return self._materialize(self._require_directory(key))

    def search_files(self, query: str) -> list[FileNode]:
        return [
            node
            for node in self._nodes.values()
            if isinstance(node, FileNode) and query in node.content
        ]

    def exists(self, path: str) -> bool:
        return normalize_path(path) in self._nodes

    def add_child_to_directory(self, parent_path: str, child_path: str) -> None:
        """Link an already registered node under a directory.

        Raises:
            NotFoundError: If the parent is missing or not a directory, or the
                child is not registered.
            ValueError: If the child's path is not below the parent's path.
        """
        parent_key = self._require_directory(parent_path)
        child_key = normalize_path(child_path)
        if child_key not in self._nodes:
            raise NotFoundError("path", child_key)
        if not is_descendant(child_key, parent_key):
            raise ValueError(f"{child_key} is not below {parent_key}")

        children = self._children[parent_key]
        if child_key not in children:
            children.append(child_key)

    def remove_child_from_directory(self, parent_path: str, child_path: str) -> None:
        """Unlink a node from a directory without deleting it."""
        parent_key = self._require_directory(parent_path)
        child_key = normalize_path(child_path)
        if child_key not in self._nodes:
            raise NotFoundError("path", child_key)
        self._children[parent_key] = [p for p in self._children[parent_key] if p != child_key]

    def _require_file(self, path: str) -> FileNode:
        key = normalize_path(path)
        node = self._nodes.get(key)
        if not isinstance(node, FileNode):
            raise NotFoundError("file", key)
        return node

    def _require_directory(self, path: str) -> str:
        key = normalize_path(path)
        if not isinstance(self._nodes.get(key), DirectoryNode):
            raise NotFoundError("directory", key)
        return key

    def _linked_descendants(self, key: str) -> set[str]:
        found: set[str] = set()
        stack = list(self._children.get(key, []))
        while stack:
            current = stack.pop()
            if current in found:
                continue
            found.add(current)
            stack.extend(self._children.get(current, []))
        return found

    def _materialize(self, key: str) -> Node:
        node = self._nodes[key]
        if isinstance(node, FileNode):
            return node
        children = [self._materialize(p) for p in self._children.get(key, []) if p in self._nodes]
        return node.model_copy(update={"children": children})


class DiskFileSystem(FileSystemBackend):
    """Project tree stored under ``base_dir`` on the local disk.

    Args:
        base_dir: Directory every path is resolved against. Paths that would
            resolve outside of it are rejected with ValueError.

    Files that are not valid UTF-8 are listed with ``is_binary`` set and empty
    content, and they never appear in search results.
    """

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir).resolve()

    def create_file(self, path: str, content: str = "", extension: str | None = None) -> FileNode:
        full_path = self._resolve(path)
        if full_path.is_dir():
            raise InvalidStateError(f"Cannot create file, a directory exists at: {self._relative(full_path)}")
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to create file {full_path}: {e}")
            raise
        logger.info(f"Created file: {full_path}")
        return self._file_node(full_path, content, extension=extension)

    def create_directory(self, path: str) -> DirectoryNode:
        full_path = self._resolve(path)
        if full_path.is_file():
            raise InvalidStateError(f"Cannot create directory, a file exists at: {self._relative(full_path)}")
        try:
            full_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create directory {full_path}: {e}")
            raise
        logger.info(f"Created directory: {full_path}")
        return self._walk(full_path)

    def delete_node(self, path: str) -> None:
        full_path = self._resolve(path)
        if not full_path.exists():
            raise NotFoundError("path", normalize_path(path))
        if full_path.is_dir():
            self._remove_tree(full_path)
        else:
            self._remove_file(full_path)

    def delete_file(self, path: str) -> None:
        full_path = self._resolve(path)
        if not full_path.exists():
            raise NotFoundError("file", normalize_path(path))
        if full_path.is_dir():
            raise InvalidStateError(f"Not a file: {normalize_path(path)}")
        self._remove_file(full_path)

    def delete_directory(self, path: str) -> None:
        full_path = self._resolve(path)
        if not full_path.exists():
            raise NotFoundError("directory", normalize_path(path))
        if not full_path.is_dir():
            raise InvalidStateError(f"Not a directory: {normalize_path(path)}")
        self._remove_tree(full_path)

    def update_file(self, path: str, content: str) -> FileNode:
        full_path = self._require_file(path)
        try:
            full_path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to update file {full_path}: {e}")
            raise
        logger.info(f"Updated file: {full_path}")
        node = self._file_node(full_path, content)
        node.is_modified = True
        return node

    def save_file(self, path: str) -> FileNode:
        full_path = self._require_file(path)
        return self._load(full_path)

    def get_node(self, path: str) -> Node:
        full_path = self._resolve(path)
        if full_path.is_dir():
            return self._walk(full_path)
        if full_path.is_file():
            return self._load(full_path)
        raise NotFoundError("path", normalize_path(path))

    def get_file_content(self, path: str) -> str:
        return self._read(self._require_file(path))

    def get_directory_contents(self, path: str) -> list[Node]:
        return self.get_directory_structure(path).children

    def get_directory_structure(self, path: str = ".") -> DirectoryNode:
        full_path = self._resolve(path)
        if not full_path.is_dir():
            raise NotFoundError("directory", normalize_path(path))
        return self._walk(full_path)

    def search_files(self, query: str) -> list[FileNode]:
        if not self.base_dir.is_dir():
            return []
        return [
            node
            for node in iter_files(self._walk(self.base_dir))
            if not node.is_binary and query in node.content
        ]

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def _resolve(self, path: str) -> Path:
        full_path = (self.base_dir / normalize_path(path).lstrip("/")).resolve()
        if full_path != self.base_dir and self.base_dir not in full_path.parents:
            raise ValueError(f"Path escapes the project directory: {path}")
        return full_path

    def _relative(self, full_path: Path) -> str:
        return full_path.relative_to(self.base_dir).as_posix()

    def _require_file(self, path: str) -> Path:
        full_path = self._resolve(path)
        if not full_path.is_file():
            raise NotFoundError("file", normalize_path(path))
        return full_path

    def _read(self, full_path: Path) -> str:
        try:
            return full_path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            raise InvalidStateError(f"Not a UTF-8 text file: {self._relative(full_path)}")
        except OSError as e:
            logger.error(f"Failed to read file {full_path}: {e}")
            raise

    def _load(self, full_path: Path) -> FileNode:
        try:
            return self._file_node(full_path, self._read(full_path))
        except InvalidStateError:
            logger.debug(f"Listing binary file without content: {full_path}")
            node = self._file_node(full_path, "")
            node.is_binary = True
            return node

    def _remove_file(self, full_path: Path) -> None:
        try:
            full_path.unlink()
        except OSError as e:
            logger.error(f"Failed to delete file {full_path}: {e}")
            raise
        logger.info(f"Deleted file: {full_path}")

    def _remove_tree(self, full_path: Path) -> None:
        try:
            shutil.rmtree(full_path)
        except OSError as e:
            logger.error(f"Failed to delete directory {full_path}: {e}")
            raise
        logger.info(f"Deleted directory: {full_path}")

    def _file_node(self, full_path: Path, content: str, extension: str | None = None) -> FileNode:
        return FileNode(
            name=full_path.name,
            path=self._relative(full_path),
            content=content,
            extension=file_extension(full_path.name) if extension is None else extension,
        )

    def _walk(self, full_path: Path) -> DirectoryNode:
        children: list[Node] = []
        for entry in sorted(full_path.iterdir(), key=lambda p: p.name):
            if entry.is_dir():
                children.append(self._walk(entry))
            else:
                children.append(self._load(entry))
        return DirectoryNode(
            name=full_path.name,
            path=self._relative(full_path),
            children=children,
        )

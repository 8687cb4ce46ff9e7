"""Whole-tree version control for a single project.

History is snapshot-based: every commit records the full path -> content map
of the working tree at commit time, plus the list of changes relative to its
parent's snapshot. Change detection therefore compares the live tree against
the materialized previous state, never against a previous diff.

This is deliberately coarse. There is no line-level diffing, no merge base
and no conflict detection: a merge applies the source branch head's changes
and the source branch wins wherever both sides touched a file.
"""

import logging
import posixpath
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from models.errors import InvalidStateError, NoCommitError, NotFoundError
from models.filesystem import FileSystemBackend
from models.node import DirectoryNode, FileNode, is_descendant, iter_files

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"
INITIAL_COMMIT_MESSAGE = "Initial commit"


class ChangeType(str, Enum):
    """How a file changed between two commits."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


class FileChange(BaseModel):
    """A single file-level change.

    Args:
        path: Path of the file relative to the project root.
        type: Kind of change.
        content: New content for added and modified files, None for deleted.
    """

    path: str
    type: ChangeType
    content: str | None = None


class CommitSummary(BaseModel):
    """Per-type change counts, as shown in the commit history panel."""

    added: int = 0
    modified: int = 0
    deleted: int = 0


class Commit(BaseModel):
    """A recorded state of the project tree.

    Args:
        id: Unique commit identifier.
        message: User-supplied description.
        timestamp: Creation time (UTC).
        author: Optional author name.
        parent_id: Head of the branch this commit was created on, None for
            the initial commit.
        changes: Changes relative to the parent's snapshot, in detection order.
        snapshot: Every file's content at commit time, keyed by path.
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    author: str | None = None
    parent_id: str | None = None
    changes: list[FileChange] = Field(default_factory=list)
    snapshot: dict[str, str] = Field(default_factory=dict)

    def summary(self) -> CommitSummary:
        """Count this commit's changes by type."""
        summary = CommitSummary()
        for change in self.changes:
            if change.type == ChangeType.ADDED:
                summary.added += 1
            elif change.type == ChangeType.MODIFIED:
                summary.modified += 1
            else:
                summary.deleted += 1
        return summary


class Branch(BaseModel):
    """A named pointer to a commit."""

    name: str
    commit_id: str
    is_current: bool = False


class VCSState(str, Enum):
    """Lifecycle of a VersionControlService."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


def diff_snapshots(previous: dict[str, str], current: dict[str, str]) -> list[FileChange]:
    """Classify every path that differs between two snapshots.

    Added and modified files come first in ``current`` order, followed by
    deleted files in ``previous`` order. Unchanged files produce no entry.
    """
    changes: list[FileChange] = []
    for path, content in current.items():
        if path not in previous:
            changes.append(FileChange(path=path, type=ChangeType.ADDED, content=content))
        elif previous[path] != content:
            changes.append(FileChange(path=path, type=ChangeType.MODIFIED, content=content))
    for path in previous:
        if path not in current:
            changes.append(FileChange(path=path, type=ChangeType.DELETED))
    return changes


class VersionControlService:
    """Commits, branches and merges over one project's file tree.

    All state lives in memory on the instance; nothing is persisted.

    Args:
        file_system: The project's file system; its root is the working tree.
    """

    def __init__(self, file_system: FileSystemBackend):
        self.file_system = file_system
        self.state = VCSState.UNINITIALIZED
        self._commits: dict[str, Commit] = {}
        self._branches: dict[str, str] = {}
        self._current_branch = DEFAULT_BRANCH

    @property
    def current_branch(self) -> str:
        """Name of the active branch."""
        return self._current_branch

    @property
    def is_initialized(self) -> bool:
        return self.state == VCSState.INITIALIZED

    def initialize(self) -> Commit:
        """Seed the empty initial commit and point ``main`` at it.

        Raises:
            InvalidStateError: If already initialized.
        """
        if self.is_initialized:
            raise InvalidStateError("Version control is already initialized")

        initial = Commit(message=INITIAL_COMMIT_MESSAGE)
        self._commits[initial.id] = initial
        self._branches[DEFAULT_BRANCH] = initial.id
        self._current_branch = DEFAULT_BRANCH
        self.state = VCSState.INITIALIZED

        logger.info("Initialized version control")
        return initial

    def status(self) -> list[FileChange]:
        """Return the changes a commit would record right now."""
        self._require_initialized()
        return diff_snapshots(self._head().snapshot, self._working_snapshot())

    def commit(self, message: str, author: str | None = None) -> Commit:
        """Snapshot the working tree and advance the active branch.

        Args:
            message: Commit description; must not be blank.
            author: Optional author name.

        Returns:
            The new commit.

        Raises:
            InvalidStateError: If not initialized.
            NoCommitError: If the active branch has no commit.
            ValueError: If the message is blank.
        """
        self._require_initialized()
        if not message or not message.strip():
            raise ValueError("Commit message cannot be empty")

        head = self._head()
        snapshot = self._working_snapshot()
        commit = Commit(
            message=message,
            author=author,
            parent_id=head.id,
            changes=diff_snapshots(head.snapshot, snapshot),
            snapshot=snapshot,
        )

        self._commits[commit.id] = commit
        self._branches[self._current_branch] = commit.id

        logger.info(
            f"Created commit {commit.id[:7]} on {self._current_branch} "
            f"with {len(commit.changes)} change(s)"
        )
        return commit

    def create_branch(self, name: str) -> Branch:
        """Create a branch at the active branch's head.

        An existing name is rejected; an existing branch is never re-pointed
        at the current head.

        Raises:
            InvalidStateError: If not initialized or ``name`` already exists.
            NoCommitError: If the active branch has no commit.
            ValueError: If the name is blank.
        """
        self._require_initialized()
        if not name or not name.strip():
            raise ValueError("Branch name cannot be empty")
        if name in self._branches:
            raise InvalidStateError(f"Branch already exists: {name}")

        head = self._head()
        self._branches[name] = head.id

        logger.info(f"Created branch: {name} at {head.id[:7]}")
        return Branch(name=name, commit_id=head.id)

    def switch_branch(self, name: str) -> Commit:
        """Make ``name`` the active branch and materialize its head.

        Every file in the target head's snapshot is written to the working
        tree, and files tracked by the current head but absent from the
        target are removed, along with directories they leave empty. Files
        never committed are left alone.

        Returns:
            The head commit of the new active branch.

        Raises:
            NotFoundError: If the branch does not exist.
            InvalidStateError: If the target tree clashes with files that
                would stay in the working tree. Nothing is changed.
        """
        self._require_initialized()
        if name not in self._branches:
            raise NotFoundError("branch", name)

        target = self._commits[self._branches[name]]
        current = self._head()
        stale = [path for path in current.snapshot if path not in target.snapshot]
        self._checkout(dict(target.snapshot), stale)

        self._current_branch = name
        logger.info(f"Switched to branch: {name}")
        return target

    def merge(self, source_branch: str) -> Commit:
        """Apply the source head's changes and record a merge commit.

        Only the changes recorded in the source branch's latest commit are
        replayed. Conflicts are not detected: the source version wins.

        Returns:
            The merge commit on the active branch.

        Raises:
            NotFoundError: If the source or active branch does not exist.
            InvalidStateError: If the source changes clash with files in the
                working tree. Nothing is changed.
        """
        self._require_initialized()
        if source_branch not in self._branches:
            raise NotFoundError("branch", source_branch)
        if self._current_branch not in self._branches:
            raise NotFoundError("branch", self._current_branch)

        source_head = self._commits[self._branches[source_branch]]
        writes = {
            change.path: change.content or ""
            for change in source_head.changes
            if change.type != ChangeType.DELETED
        }
        removals = [change.path for change in source_head.changes if change.type == ChangeType.DELETED]
        self._checkout(writes, removals)

        commit = self.commit(f"Merge {source_branch} into {self._current_branch}")
        logger.info(f"Merged {source_branch} into {self._current_branch}")
        return commit

    def list_branches(self) -> list[Branch]:
        """Return every branch, in creation order."""
        self._require_initialized()
        return [
            Branch(name=name, commit_id=commit_id, is_current=name == self._current_branch)
            for name, commit_id in self._branches.items()
        ]

    def get_commit(self, commit_id: str) -> Commit:
        """Return a commit by id.

        Raises:
            NotFoundError: If no such commit exists.
        """
        self._require_initialized()
        commit = self._commits.get(commit_id)
        if commit is None:
            raise NotFoundError("commit", commit_id)
        return commit

    def log(self, branch: str | None = None, limit: int | None = None) -> list[Commit]:
        """Return a branch's history, newest first.

        Args:
            branch: Branch to walk (default: the active branch).
            limit: Maximum number of commits to return.

        Raises:
            NotFoundError: If the branch does not exist.
        """
        self._require_initialized()
        branch = branch or self._current_branch
        if branch not in self._branches:
            raise NotFoundError("branch", branch)

        history: list[Commit] = []
        commit_id: str | None = self._branches[branch]
        while commit_id is not None and (limit is None or len(history) < limit):
            commit = self._commits[commit_id]
            history.append(commit)
            commit_id = commit.parent_id
        return history

    def _require_initialized(self) -> None:
        if not self.is_initialized:
            raise InvalidStateError("Version control is not initialized")

    def _head(self) -> Commit:
        commit_id = self._branches.get(self._current_branch)
        if commit_id is None:
            raise NoCommitError(self._current_branch)
        return self._commits[commit_id]

    def _working_files(self) -> list[FileNode]:
        return list(iter_files(self.file_system.get_directory_structure(".")))

    def _working_snapshot(self) -> dict[str, str]:
        snapshot: dict[str, str] = {}
        for node in self._working_files():
            if node.is_binary:
                logger.warning(f"Not tracking binary file: {node.path}")
                continue
            snapshot[node.path] = node.content
        return snapshot

    def _checkout(self, writes: dict[str, str], removals: list[str]) -> None:
        """Remove ``removals`` and write ``writes`` into the working tree.

        Every write is checked against the files that stay before anything is
        touched: a file cannot go below a remaining file, nor replace a
        directory that still holds one.

        Raises:
            InvalidStateError: On the first clashing path.
        """
        doomed = set(removals)
        remaining = [node.path for node in self._working_files() if node.path not in doomed]
        for path in writes:
            blocking = sorted(
                other
                for other in remaining
                if is_descendant(path, other) or is_descendant(other, path)
            )
            if blocking:
                raise InvalidStateError(f"Cannot write {path}, it clashes with: {', '.join(blocking)}")

        kept = set(remaining) | set(writes)
        for path in removals:
            if self.file_system.exists(path):
                self.file_system.delete_node(path)
                self._prune_empty_parents(path, kept)
        for path, content in writes.items():
            if self.file_system.exists(path) and isinstance(self.file_system.get_node(path), DirectoryNode):
                self.file_system.delete_node(path)
            self.file_system.create_file(path, content)

    def _prune_empty_parents(self, path: str, kept: set[str]) -> None:
        parent = posixpath.dirname(path)
        while parent and parent != "." and self.file_system.exists(parent):
            if any(is_descendant(other, parent) for other in kept):
                break
            if self.file_system.get_directory_contents(parent):
                break
            self.file_system.delete_node(parent)
            parent = posixpath.dirname(parent)

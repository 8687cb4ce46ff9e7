"""Project core models and services.

This package contains the file tree node models, the file system backends,
the template registry, the version control service and the workspace that
ties them together per project.
"""

from models.errors import (
    IDEError,
    InvalidStateError,
    NoCommitError,
    NotFoundError,
    TemplateLoadError,
)
from models.node import DirectoryNode, FileNode, FileSystemNode, NodeType
from models.filesystem import DiskFileSystem, FileSystemBackend, InMemoryFileSystem
from models.template import Template, TemplateManifest, TemplateService, render_template
from models.version_control import (
    Branch,
    ChangeType,
    Commit,
    FileChange,
    VCSState,
    VersionControlService,
)
from models.workspace import Workspace

__all__ = [
    "IDEError",
    "NotFoundError",
    "InvalidStateError",
    "NoCommitError",
    "TemplateLoadError",
    "NodeType",
    "FileNode",
    "DirectoryNode",
    "FileSystemNode",
    "FileSystemBackend",
    "InMemoryFileSystem",
    "DiskFileSystem",
    "Template",
    "TemplateManifest",
    "TemplateService",
    "render_template",
    "ChangeType",
    "FileChange",
    "Commit",
    "Branch",
    "VCSState",
    "VersionControlService",
    "Workspace",
]

"""Domain errors raised by the project services.

Every service method fails fast with one of these and leaves prior state
untouched. The HTTP layer translates them into responses (see
api/exceptions.py); the services themselves know nothing about status codes.
"""


class IDEError(Exception):
    """Base class for all project service errors.

    Args:
        message: Human-readable description of the failure.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(IDEError):
    """Raised when a path, template, branch or commit does not exist.

    Args:
        kind: What was being looked up ("path", "file", "directory",
            "template", "branch", "commit", "project").
        key: The identifier that was not found.
    """

    def __init__(self, kind: str, key: str, message: str | None = None):
        self.kind = kind
        self.key = key
        super().__init__(message or f"{kind.capitalize()} not found: {key}")


class InvalidStateError(IDEError):
    """Raised when an operation is not valid in the current state.

    Covers version control used before initialization, and node type
    mismatches such as writing a file over an existing directory.
    """


class NoCommitError(InvalidStateError):
    """Raised when the active branch has no commit to build on."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"No commit found for branch: {branch}")


class TemplateLoadError(IDEError):
    """Raised when a template manifest is missing, malformed or invalid.

    Args:
        path: Path of the offending manifest or template directory.
        reason: What went wrong while loading it.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load template at {path}: {reason}")

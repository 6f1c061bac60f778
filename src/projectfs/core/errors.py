"""Error taxonomy for sandboxed project file access."""

from __future__ import annotations

from typing import ClassVar


class ProjectFileError(ValueError):
    """Base error for recoverable project file failures."""

    code: ClassVar[str] = "project_file_error"


class InvalidArgumentError(ProjectFileError):
    code = "invalid_argument"


class SandboxViolationError(ProjectFileError):
    """Path resolves outside the sandbox root."""

    code = "sandbox_violation"

    def __init__(self, path: str, root: str) -> None:
        super().__init__(f"access denied: path {path} is outside project directory {root}")
        self.path = path
        self.root = root


class NotFoundError(ProjectFileError):
    code = "not_found"


class TooLargeError(ProjectFileError):
    code = "too_large"


class NotTextError(ProjectFileError):
    code = "not_text"


class NotTrackedError(ProjectFileError):
    """File must be read before it can be overwritten or edited."""

    code = "not_tracked"


class StaleFileError(ProjectFileError):
    """File changed on disk after it was last read."""

    code = "stale"


class AmbiguousEditError(ProjectFileError):
    """Search text does not identify exactly one location."""

    code = "ambiguous_edit"

    def __init__(self, message: str, occurrences: int) -> None:
        super().__init__(message)
        self.occurrences = occurrences


class InvalidPatternError(ProjectFileError):
    code = "invalid_pattern"


class FileAccessError(ProjectFileError):
    """Operating system refused a file operation."""

    code = "io_error"

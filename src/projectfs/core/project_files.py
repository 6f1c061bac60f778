"""Sandboxed file operations for one project root."""

from __future__ import annotations

from pathlib import Path

from projectfs.core.file_editor import DEFAULT_MAX_FILE_SIZE, FileEditor
from projectfs.core.file_lister import FileLister
from projectfs.core.grep_engine import DEFAULT_MAX_RESULTS, GrepEngine
from projectfs.core.ignore_patterns import IgnorePatternCache, default_ignore_cache
from projectfs.core.path_validator import PathValidator
from projectfs.core.staleness import StalenessTracker
from projectfs.models.grep import GrepResult


class ProjectFiles:
    """Constrained file operations within project boundaries.

    The root is fixed at construction. Every operation validates its path
    first; reads feed the staleness tracker that gates writes and edits.
    """

    def __init__(
        self,
        root: str | Path,
        *,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        ignore_cache: IgnorePatternCache | None = None,
    ) -> None:
        self._validator = PathValidator(root)
        self._tracker = StalenessTracker()
        cache = ignore_cache if ignore_cache is not None else default_ignore_cache()
        self._lister = FileLister(self._validator.root, cache)
        self._grep = GrepEngine(self._validator.root, cache)
        self._editor = FileEditor(self._validator, self._tracker, max_file_size=max_file_size)

    @property
    def root(self) -> Path:
        return self._validator.root

    @property
    def tracker(self) -> StalenessTracker:
        return self._tracker

    def list_files(
        self, glob_pattern: str | None = None, *, include_ignored: bool = False
    ) -> list[str]:
        return self._lister.list(glob_pattern, include_ignored=include_ignored)

    def read_file(self, path: str, line_offset: int = 0, count: int | None = None) -> str:
        return self._editor.read(path, line_offset, count)

    def write_file(self, path: str, content: str) -> None:
        self._editor.write(path, content)

    def edit_file(self, path: str, old_string: str, new_string: str) -> None:
        self._editor.edit(path, old_string, new_string)

    def grep(
        self,
        pattern: str,
        glob: str | None = None,
        *,
        case_sensitive: bool = False,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> list[GrepResult]:
        return self._grep.grep(
            pattern,
            glob,
            case_sensitive=case_sensitive,
            max_results=max_results,
        )

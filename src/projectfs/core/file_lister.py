"""List project files with glob and ignore filtering."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from projectfs.core.globbing import GlobFilter
from projectfs.core.ignore_patterns import IGNORE_FILE_NAME, IgnorePatternCache, matches_any

logger = logging.getLogger(__name__)

VCS_DIR_NAME = ".git"


def walk_files(root: Path) -> Iterator[tuple[Path, str]]:
    """Yield `(absolute_path, relative_path)` for every file under `root`.

    Entries are visited in lexical order. Directories that cannot be scanned
    are skipped. Symlinked directories are not followed.
    """
    yield from _walk(root, "")


def _walk(directory: Path, prefix: str) -> Iterator[tuple[Path, str]]:
    try:
        with os.scandir(directory) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except OSError as exc:
        logger.debug("Skipping unreadable directory %s: %s", directory, exc)
        return

    for entry in entries:
        rel_path = f"{prefix}{entry.name}"
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            logger.debug("Skipping unreadable entry %s: %s", entry.path, exc)
            continue
        if is_dir:
            if not prefix and entry.name == VCS_DIR_NAME:
                continue
            yield from _walk(Path(entry.path), rel_path + "/")
            continue
        if not prefix and entry.name == IGNORE_FILE_NAME:
            continue
        yield Path(entry.path), rel_path


class FileLister:
    """List files under one root."""

    def __init__(self, root: Path, ignore_cache: IgnorePatternCache) -> None:
        self._root = root
        self._ignore_cache = ignore_cache

    def list(self, glob_pattern: str | None = None, *, include_ignored: bool = False) -> list[str]:
        glob_filter = GlobFilter(glob_pattern) if glob_pattern else None
        ignore_patterns = () if include_ignored else self._ignore_cache.get(self._root)

        files: list[str] = []
        for _, rel_path in walk_files(self._root):
            if glob_filter is not None and not glob_filter.match(rel_path):
                continue
            if ignore_patterns and matches_any(ignore_patterns, rel_path):
                continue
            files.append(rel_path)
        return files

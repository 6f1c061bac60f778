"""Line-oriented text search across the project tree."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path

from projectfs.core.file_lister import walk_files
from projectfs.core.globbing import GlobFilter
from projectfs.core.ignore_patterns import IgnorePatternCache, matches_any
from projectfs.models.grep import GrepResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 100
MAX_LINE_CHARS = 200

type LineMatcher = Callable[[str], bool]


def build_line_matcher(pattern: str, *, case_sensitive: bool) -> LineMatcher:
    """Compile `pattern` as a regex, or fall back to a substring test."""
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        regex = re.compile(pattern, flags)
    except re.error:
        logger.debug("Pattern %r is not a valid regex; using literal search", pattern)
    else:
        return lambda line: regex.search(line) is not None

    if case_sensitive:
        return lambda line: pattern in line
    folded = pattern.lower()
    return lambda line: folded in line.lower()


class GrepEngine:
    """Search files under one root."""

    def __init__(self, root: Path, ignore_cache: IgnorePatternCache) -> None:
        self._root = root
        self._ignore_cache = ignore_cache

    def grep(
        self,
        pattern: str,
        glob: str | None = None,
        *,
        case_sensitive: bool = False,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> list[GrepResult]:
        # An explicit glob replaces ignore-file filtering.
        glob_filter = GlobFilter(glob) if glob else None
        ignore_patterns = () if glob_filter is not None else self._ignore_cache.get(self._root)
        matches = build_line_matcher(pattern, case_sensitive=case_sensitive)

        results: list[GrepResult] = []
        if max_results <= 0:
            return results

        for path, rel_path in walk_files(self._root):
            if glob_filter is not None and not glob_filter.match(rel_path):
                continue
            if ignore_patterns and matches_any(ignore_patterns, rel_path):
                continue
            if self._search_file(path, rel_path, matches, results, max_results):
                break
        return results

    @staticmethod
    def _search_file(
        path: Path,
        rel_path: str,
        matches: LineMatcher,
        results: list[GrepResult],
        max_results: int,
    ) -> bool:
        """Append matches from one file; return True once the cap is reached."""
        try:
            text = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError):
            return False

        for number, line in enumerate(text.split("\n"), start=1):
            if not matches(line):
                continue
            results.append(GrepResult(path=rel_path, line=number, content=line[:MAX_LINE_CHARS]))
            if len(results) >= max_results:
                return True
        return False

"""Translate `.gitignore` lines into glob matchers.

Negated lines (`!pattern`) are recognized and dropped: negation is not
supported. Patterns are cached per root for the life of the process and are
not reloaded when the ignore file changes.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from projectfs.core.errors import InvalidPatternError
from projectfs.core.globbing import CompiledGlob, compile_glob

logger = logging.getLogger(__name__)

IGNORE_FILE_NAME = ".gitignore"


@dataclass(frozen=True, slots=True)
class IgnorePattern:
    """One compiled ignore rule and the line it came from."""

    line: str
    glob: CompiledGlob

    def match(self, rel_path: str) -> bool:
        return self.glob.match(rel_path)


def translate_ignore_line(line: str) -> str | None:
    """Convert one ignore-file line into a glob, or `None` if it yields nothing."""
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("!"):
        return None

    if line.startswith("/"):
        anchored = line[1:]
        if anchored.endswith("/"):
            return anchored + "**"
        return anchored

    if line.endswith("/"):
        return "{" + line + "**," + "**/" + line + "**}"

    if "**" in line:
        return line

    return "{" + line + ",**/" + line + "}"


def parse_ignore_lines(lines: list[str]) -> tuple[IgnorePattern, ...]:
    patterns: list[IgnorePattern] = []
    for raw in lines:
        glob = translate_ignore_line(raw)
        if glob is None:
            continue
        try:
            patterns.append(IgnorePattern(line=raw.strip(), glob=compile_glob(glob)))
        except InvalidPatternError:
            logger.debug("Skipping uncompilable ignore rule: %s", raw.strip())
    return tuple(patterns)


def matches_any(patterns: tuple[IgnorePattern, ...], rel_path: str) -> bool:
    return any(pattern.match(rel_path) for pattern in patterns)


class IgnorePatternCache:
    """Process-wide, lock-guarded cache of ignore patterns keyed by root."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._patterns: dict[Path, tuple[IgnorePattern, ...]] = {}

    def get(self, root: Path) -> tuple[IgnorePattern, ...]:
        with self._lock:
            cached = self._patterns.get(root)
        if cached is not None:
            return cached

        ignore_file = root / IGNORE_FILE_NAME
        try:
            text = ignore_file.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            patterns: tuple[IgnorePattern, ...] = ()
        except OSError as exc:
            # Not cached so that a later call can retry.
            logger.warning("Could not read %s: %s", ignore_file, exc)
            return ()
        else:
            patterns = parse_ignore_lines(text.splitlines())

        with self._lock:
            # First writer wins; concurrent loaders agree on the result.
            stored = self._patterns.setdefault(root, patterns)
        logger.info("Loaded %d ignore patterns for %s", len(stored), root)
        return stored

    def __len__(self) -> int:
        with self._lock:
            return len(self._patterns)


_DEFAULT_CACHE = IgnorePatternCache()


def default_ignore_cache() -> IgnorePatternCache:
    return _DEFAULT_CACHE

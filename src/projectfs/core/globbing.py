"""Glob compilation for root-relative paths.

Globs match whole `/`-separated paths. `*` and `**` both cross directory
boundaries, `?` and `[...]` behave as in `fnmatch`, and `{a,b}` alternation is
expanded before translation.
"""

from __future__ import annotations

import fnmatch
import re
from dataclasses import dataclass

from projectfs.core.errors import InvalidPatternError

RECURSIVE_PREFIX = "**/"


@dataclass(frozen=True, slots=True)
class CompiledGlob:
    """A glob and the regular expression that implements it."""

    pattern: str
    regex: re.Pattern[str]

    def match(self, rel_path: str) -> bool:
        return self.regex.match(rel_path) is not None


def compile_glob(pattern: str) -> CompiledGlob:
    """Compile `pattern`, raising `InvalidPatternError` on malformed input."""
    _check_brackets(pattern)
    alternatives = expand_braces(pattern)
    joined = "|".join(f"(?:{fnmatch.translate(alt)})" for alt in alternatives)
    try:
        regex = re.compile(joined)
    except re.error as exc:
        msg = f"invalid glob pattern {pattern!r}: {exc}"
        raise InvalidPatternError(msg) from exc
    return CompiledGlob(pattern=pattern, regex=regex)


def expand_braces(pattern: str) -> list[str]:
    """Expand `{a,b}` groups into every alternative, left to right."""
    start = pattern.find("{")
    if start == -1:
        if "}" in pattern:
            msg = f"invalid glob pattern {pattern!r}: unmatched '}}'"
            raise InvalidPatternError(msg)
        return [pattern]

    if "}" in pattern[:start]:
        msg = f"invalid glob pattern {pattern!r}: unmatched '}}'"
        raise InvalidPatternError(msg)

    depth = 0
    options: list[str] = []
    chunk_start = start + 1
    for index in range(start, len(pattern)):
        char = pattern[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                options.append(pattern[chunk_start:index])
                head, tail = pattern[:start], pattern[index + 1 :]
                expanded: list[str] = []
                for option in options:
                    expanded.extend(expand_braces(head + option + tail))
                return expanded
        elif char == "," and depth == 1:
            options.append(pattern[chunk_start:index])
            chunk_start = index + 1

    msg = f"invalid glob pattern {pattern!r}: unmatched '{{'"
    raise InvalidPatternError(msg)


def _check_brackets(pattern: str) -> None:
    index = 0
    while index < len(pattern):
        if pattern[index] == "[":
            # A ']' directly after '[' is a literal member of the class.
            search_from = index + 2 if pattern[index + 1 : index + 2] == "]" else index + 1
            close = pattern.find("]", search_from)
            if close == -1:
                msg = f"invalid glob pattern {pattern!r}: unmatched '['"
                raise InvalidPatternError(msg)
            index = close
        index += 1


class GlobFilter:
    """Caller-supplied glob filter shared by listing and search.

    A pattern with a leading `**/` also matches with that prefix stripped, so
    `**/*.go` finds root-level files. A pattern without `/` only matches
    root-level files, even when it uses `**`.
    """

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._primary = compile_glob(pattern)
        self._secondary: CompiledGlob | None = None
        if pattern.startswith(RECURSIVE_PREFIX):
            try:
                self._secondary = compile_glob(pattern[len(RECURSIVE_PREFIX) :])
            except InvalidPatternError:
                self._secondary = None
        self._root_only = "/" not in pattern

    def match(self, rel_path: str) -> bool:
        matched = self._primary.match(rel_path)
        if not matched and self._secondary is not None:
            matched = self._secondary.match(rel_path)
        if matched and self._root_only and "/" in rel_path:
            return False
        return matched

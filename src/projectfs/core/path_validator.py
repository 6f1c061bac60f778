"""Resolve caller paths against the sandbox root."""

from __future__ import annotations

import os
from pathlib import Path

from projectfs.core.errors import InvalidArgumentError, SandboxViolationError


class PathValidator:
    """Confine every path to one immutable root directory."""

    def __init__(self, root: str | Path) -> None:
        self._root = os.path.normpath(os.path.abspath(os.fspath(root)))

    @property
    def root(self) -> Path:
        return Path(self._root)

    def validate(self, path: str | Path) -> Path:
        """Return the absolute form of `path` if it lies within the root.

        Relative paths are joined to the root. `.`/`..` segments and redundant
        separators are collapsed before the containment check, so rejected
        paths never touch the filesystem.
        """
        raw = os.fspath(path)
        if "\x00" in raw:
            msg = f"path contains a NUL byte: {raw!r}"
            raise InvalidArgumentError(msg)
        candidate = os.path.normpath(os.path.join(self._root, raw))
        if not self._contains(self._root, candidate):
            raise SandboxViolationError(candidate, self._root)

        # Symlinks inside the tree may still point elsewhere.
        real_root = os.path.realpath(self._root)
        real_candidate = os.path.realpath(candidate)
        if not self._contains(real_root, real_candidate):
            raise SandboxViolationError(candidate, self._root)
        return Path(candidate)

    @staticmethod
    def _contains(root: str, candidate: str) -> bool:
        if candidate == root:
            return True
        prefix = root if root.endswith(os.sep) else root + os.sep
        return candidate.startswith(prefix)

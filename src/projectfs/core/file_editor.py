"""Read, write and edit project files behind the staleness gate."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
import threading
from pathlib import Path

from projectfs.core.errors import (
    AmbiguousEditError,
    FileAccessError,
    InvalidArgumentError,
    NotFoundError,
    NotTextError,
    TooLargeError,
)
from projectfs.core.path_validator import PathValidator
from projectfs.core.staleness import StalenessTracker, modification_time

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILE_SIZE = 262_144
_NEW_FILE_MODE = 0o644


def slice_lines(content: str, line_offset: int = 0, count: int | None = None) -> str:
    """Return `count` lines of `content` starting at `line_offset`.

    `None` or 0 for `count` means all remaining lines.
    """
    if line_offset < 0:
        msg = "line_offset must be non-negative"
        raise InvalidArgumentError(msg)
    if count is not None and count < 0:
        msg = "count must be non-negative"
        raise InvalidArgumentError(msg)
    if line_offset == 0 and not count:
        return content

    lines = content.split("\n")
    if line_offset >= len(lines):
        return ""
    end = len(lines) if not count else min(line_offset + count, len(lines))
    return "\n".join(lines[line_offset:end])


def replace_once(content: str, old_string: str, new_string: str) -> str:
    """Replace the single occurrence of `old_string` in `content`."""
    occurrences = content.count(old_string)
    if occurrences == 0:
        msg = "the original substring was not found in the file. No edits were made"
        raise AmbiguousEditError(msg, occurrences)
    if occurrences > 1:
        msg = (
            f"the substring was found more than once ({occurrences} times) in the file. "
            "No edits were made. Ensure uniqueness by providing more context"
        )
        raise AmbiguousEditError(msg, occurrences)
    return content.replace(old_string, new_string, 1)


class FileEditor:
    """Sandboxed file reads and staleness-checked mutations."""

    def __init__(
        self,
        validator: PathValidator,
        tracker: StalenessTracker,
        *,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ) -> None:
        self._validator = validator
        self._tracker = tracker
        self._max_file_size = max_file_size
        self._mutation_lock = threading.Lock()

    def read(self, path: str, line_offset: int = 0, count: int | None = None) -> str:
        target = self._validator.validate(path)
        try:
            stat_result = target.stat()
        except FileNotFoundError as exc:
            msg = f"file does not exist: {path}"
            raise NotFoundError(msg) from exc
        except OSError as exc:
            msg = f"failed to stat file: {exc}"
            raise FileAccessError(msg) from exc

        if not stat.S_ISREG(stat_result.st_mode):
            msg = f"cannot read non-regular file: {path}"
            raise NotFoundError(msg)
        if stat_result.st_size > self._max_file_size:
            msg = (
                f"file is too large to read ({stat_result.st_size} bytes). "
                f"Maximum size is {self._max_file_size} bytes"
            )
            raise TooLargeError(msg)

        try:
            data = target.read_bytes()
        except OSError as exc:
            msg = f"failed to read file: {exc}"
            raise FileAccessError(msg) from exc
        content = self._decode(data, path)
        self._tracker.record(target, modification_time(stat_result))
        return slice_lines(content, line_offset, count)

    def write(self, path: str, content: str) -> None:
        target = self._validator.validate(path)
        with self._mutation_lock:
            self._tracker.check(target, allow_missing=True)
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                self._replace_contents(target, content)
            except OSError as exc:
                msg = f"failed to write file: {exc}"
                raise FileAccessError(msg) from exc
        logger.info("Wrote %s (%d chars)", target, len(content))

    def edit(self, path: str, old_string: str, new_string: str) -> None:
        target = self._validator.validate(path)
        with self._mutation_lock:
            self._tracker.check(target, allow_missing=False)
            try:
                current = self._decode(target.read_bytes(), path)
                self._replace_contents(target, replace_once(current, old_string, new_string))
            except OSError as exc:
                msg = f"failed to edit file: {exc}"
                raise FileAccessError(msg) from exc
        logger.info("Edited %s", target)

    def _replace_contents(self, target: Path, content: str) -> None:
        try:
            mode = stat.S_IMODE(target.stat().st_mode)
        except FileNotFoundError:
            mode = _NEW_FILE_MODE

        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(content.encode("utf-8"))
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        self._tracker.record(target, modification_time(target.stat()))

    @staticmethod
    def _decode(data: bytes, path: str) -> str:
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"cannot read file {path}, because it contains invalid UTF-8 characters"
            raise NotTextError(msg) from exc

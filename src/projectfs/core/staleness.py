"""Read-before-write tracking."""

from __future__ import annotations

import os
import threading
from pathlib import Path

from projectfs.core.errors import (
    FileAccessError,
    NotFoundError,
    NotTrackedError,
    StaleFileError,
)


def modification_time(stat_result: os.stat_result) -> int:
    """Whole-second modification time used for staleness comparisons."""
    return int(stat_result.st_mtime)


class StalenessTracker:
    """Remember the modification time seen at each path's last read.

    Entries never expire. All access goes through one lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._read_times: dict[Path, int] = {}

    def record(self, path: Path, mtime: int) -> None:
        with self._lock:
            self._read_times[path] = mtime

    def last_read(self, path: Path) -> int | None:
        with self._lock:
            return self._read_times.get(path)

    def is_tracked(self, path: Path) -> bool:
        return self.last_read(path) is not None

    def check(self, path: Path, *, allow_missing: bool) -> None:
        """Raise unless `path` may be mutated.

        A missing file passes only when `allow_missing` is set (first write of
        a new file). Otherwise it is untracked, or gone if it was read before.
        """
        last_read = self.last_read(path)
        try:
            stat_result = path.stat()
        except (FileNotFoundError, NotADirectoryError) as exc:
            if allow_missing:
                return
            if last_read is None:
                msg = f"file does not exist and has not been read: {path}"
                raise NotTrackedError(msg) from exc
            msg = f"file does not exist: {path}"
            raise NotFoundError(msg) from exc
        except OSError as exc:
            msg = f"failed to stat file: {exc}"
            raise FileAccessError(msg) from exc

        if last_read is None:
            msg = (
                "file has not been read yet. "
                "Use read_project_file first before overwriting it"
            )
            raise NotTrackedError(msg)
        if modification_time(stat_result) > last_read:
            msg = (
                "file has been modified since last read. "
                "Use read_project_file first to read it again"
            )
            raise StaleFileError(msg)

    def __len__(self) -> int:
        with self._lock:
            return len(self._read_times)

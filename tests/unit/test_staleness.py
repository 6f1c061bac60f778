from __future__ import annotations

import os
import threading
from pathlib import Path

import pytest

from projectfs.core.errors import (
    FileAccessError,
    NotFoundError,
    NotTrackedError,
    StaleFileError,
)
from projectfs.core.staleness import StalenessTracker, modification_time
from tests.support.project_tree import touch_later


def test_missing_file_passes_when_allowed(tmp_path: Path) -> None:
    tracker = StalenessTracker()
    tracker.check(tmp_path / "new.txt", allow_missing=True)


def test_missing_untracked_file_is_not_tracked(tmp_path: Path) -> None:
    tracker = StalenessTracker()
    with pytest.raises(NotTrackedError):
        tracker.check(tmp_path / "new.txt", allow_missing=False)


def test_missing_file_that_was_read_is_not_found(tmp_path: Path) -> None:
    tracker = StalenessTracker()
    tracker.record(tmp_path / "gone.txt", 100)
    with pytest.raises(NotFoundError):
        tracker.check(tmp_path / "gone.txt", allow_missing=False)


def test_existing_untracked_file_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "a.txt"
    path.write_text("a", encoding="utf-8")
    tracker = StalenessTracker()

    with pytest.raises(NotTrackedError, match="has not been read yet"):
        tracker.check(path, allow_missing=True)


def test_fresh_and_stale_states(tmp_path: Path) -> None:
    path = tmp_path / "a.txt"
    path.write_text("a", encoding="utf-8")
    tracker = StalenessTracker()
    tracker.record(path, modification_time(path.stat()))

    tracker.check(path, allow_missing=False)

    touch_later(path)
    with pytest.raises(StaleFileError, match="modified since last read"):
        tracker.check(path, allow_missing=False)


def test_concurrent_records_are_all_kept(tmp_path: Path) -> None:
    tracker = StalenessTracker()

    def record(index: int) -> None:
        for offset in range(50):
            tracker.record(tmp_path / f"{index}-{offset}.txt", offset)

    threads = [threading.Thread(target=record, args=(index,)) for index in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(tracker) == 400
    assert tracker.last_read(tmp_path / "3-7.txt") == 7


def test_unstattable_file_is_an_access_error(tmp_path: Path) -> None:
    loop = tmp_path / "loop.txt"
    os.symlink(loop.name, loop)
    tracker = StalenessTracker()

    with pytest.raises(FileAccessError, match="failed to stat file"):
        tracker.check(loop, allow_missing=True)

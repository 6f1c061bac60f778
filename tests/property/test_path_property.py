from pathlib import Path

from hypothesis import given
from hypothesis import strategies as st

from projectfs.core.errors import SandboxViolationError
from projectfs.core.path_validator import PathValidator

ROOT = Path("/srv/projectfs-sandbox/root")

_segment = st.text(
    alphabet="abcdefghijklmnopqrstuvwxyz0123456789._-",
    min_size=1,
    max_size=8,
).filter(lambda value: value not in {".", ".."})


@given(st.lists(_segment, min_size=1, max_size=4), st.integers(min_value=1, max_value=5))
def test_climbing_above_root_is_rejected(segments: list[str], extra_ups: int) -> None:
    validator = PathValidator(ROOT)
    path = "/".join([".."] * (len(segments) + extra_ups) + segments)
    try:
        validator.validate(path)
    except SandboxViolationError:
        return
    raise AssertionError(f"{path} was accepted")


@given(st.lists(_segment, min_size=1, max_size=4))
def test_plain_relative_paths_stay_inside_root(segments: list[str]) -> None:
    validator = PathValidator(ROOT)
    validated = validator.validate("/".join(segments))
    assert str(validated).startswith(str(ROOT) + "/")


@given(_segment)
def test_sibling_directories_sharing_a_prefix_are_rejected(suffix: str) -> None:
    validator = PathValidator(ROOT)
    try:
        validator.validate(f"{ROOT}{suffix}/file.txt")
    except SandboxViolationError:
        return
    raise AssertionError(f"sibling {ROOT}{suffix} was accepted")

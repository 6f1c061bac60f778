from __future__ import annotations

import pytest

from projectfs.core.errors import InvalidPatternError
from projectfs.core.globbing import GlobFilter, compile_glob, expand_braces


def test_star_crosses_directory_boundaries() -> None:
    glob = compile_glob("*.go")
    assert glob.match("main.go")
    assert glob.match("src/utils.go")
    assert not glob.match("main.go.bak")


def test_recursive_glob_requires_separator() -> None:
    glob = compile_glob("**/*.go")
    assert glob.match("src/utils.go")
    assert not glob.match("main.go")


def test_brace_alternation() -> None:
    glob = compile_glob("{build/**,**/build/**}")
    assert glob.match("build/out.bin")
    assert glob.match("pkg/build/out.bin")
    assert not glob.match("builder/out.bin")


def test_expand_braces_handles_nesting() -> None:
    assert expand_braces("a{b,{c,d}}e") == ["abe", "ace", "ade"]
    assert expand_braces("plain") == ["plain"]


@pytest.mark.parametrize("pattern", ["{a,b", "a}b", "file[0-9"])
def test_malformed_globs_raise(pattern: str) -> None:
    with pytest.raises(InvalidPatternError):
        compile_glob(pattern)


def test_character_class_with_literal_bracket() -> None:
    assert compile_glob("[]a].txt").match("].txt")


def test_filter_recursive_prefix_also_matches_root_level() -> None:
    glob_filter = GlobFilter("**/*.go")
    assert glob_filter.match("main.go")
    assert glob_filter.match("cmd/server/main.go")


def test_filter_without_separator_is_root_level_only() -> None:
    glob_filter = GlobFilter("*.go")
    assert glob_filter.match("main.go")
    assert not glob_filter.match("src/utils.go")


def test_filter_with_directory_prefix() -> None:
    glob_filter = GlobFilter("cmd/**/*.go")
    assert glob_filter.match("cmd/server/main.go")
    assert not glob_filter.match("main.go")


def test_filter_rejects_invalid_pattern() -> None:
    with pytest.raises(InvalidPatternError, match="invalid glob pattern"):
        GlobFilter("src/{a,b")


@pytest.mark.parametrize("pattern", ["**", "**.go"])
def test_filter_double_star_without_separator_is_root_level_only(pattern: str) -> None:
    glob_filter = GlobFilter(pattern)
    assert glob_filter.match("main.go")
    assert not glob_filter.match("src/utils.go")

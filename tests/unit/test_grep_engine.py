from __future__ import annotations

from pathlib import Path

from projectfs.core.grep_engine import GrepEngine, build_line_matcher
from projectfs.core.ignore_patterns import IgnorePatternCache
from projectfs.models.grep import GrepResult
from tests.support.project_tree import make_tree


def _engine(root: Path) -> GrepEngine:
    return GrepEngine(root, IgnorePatternCache())


def test_case_insensitive_by_default(tmp_path: Path) -> None:
    make_tree(tmp_path, {"main.go": "package main\n// todo: fix\n"})
    engine = _engine(tmp_path)

    assert engine.grep("TODO") == [GrepResult(path="main.go", line=2, content="// todo: fix")]
    assert engine.grep("TODO", case_sensitive=True) == []


def test_regex_pattern(tmp_path: Path) -> None:
    make_tree(tmp_path, {"a.py": "def alpha():\n    pass\ndef beta():\n"})
    results = _engine(tmp_path).grep(r"^def \w+\(")

    assert [(result.line, result.content) for result in results] == [
        (1, "def alpha():"),
        (3, "def beta():"),
    ]


def test_invalid_regex_falls_back_to_literal_search(tmp_path: Path) -> None:
    make_tree(tmp_path, {"a.txt": "call(x\nCALL(Y\nnothing\n"})
    engine = _engine(tmp_path)

    assert [result.line for result in engine.grep("call(")] == [1, 2]
    assert [result.line for result in engine.grep("call(", case_sensitive=True)] == [1]


def test_line_matcher_fallback_is_case_folded() -> None:
    matches = build_line_matcher("[unclosed", case_sensitive=False)
    assert matches("has [UNCLOSED bracket")
    assert not matches("nothing here")


def test_ignored_files_are_skipped_without_glob(tmp_path: Path) -> None:
    make_tree(
        tmp_path,
        {
            "src/app.py": "needle\n",
            "build/gen.py": "needle\n",
            ".gitignore": "build/\n",
        },
    )
    engine = _engine(tmp_path)

    assert [result.path for result in engine.grep("needle")] == ["src/app.py"]


def test_explicit_glob_overrides_ignore_rules(tmp_path: Path) -> None:
    make_tree(
        tmp_path,
        {
            "src/app.py": "needle\n",
            "build/gen.py": "needle\n",
            "build/notes.txt": "needle\n",
            ".gitignore": "build/\n",
        },
    )
    engine = _engine(tmp_path)

    assert [result.path for result in engine.grep("needle", "**/*.py")] == [
        "build/gen.py",
        "src/app.py",
    ]


def test_max_results_caps_across_files(tmp_path: Path) -> None:
    make_tree(
        tmp_path,
        {
            "a.txt": "hit\nhit\nhit\n",
            "b.txt": "hit\nhit\n",
        },
    )
    engine = _engine(tmp_path)

    capped = engine.grep("hit", max_results=4)
    assert [(result.path, result.line) for result in capped] == [
        ("a.txt", 1),
        ("a.txt", 2),
        ("a.txt", 3),
        ("b.txt", 1),
    ]
    assert engine.grep("hit", max_results=0) == []


def test_long_lines_are_truncated(tmp_path: Path) -> None:
    make_tree(tmp_path, {"long.txt": "match " + "x" * 500 + "\n"})
    (result,) = _engine(tmp_path).grep("match")

    assert len(result.content) == 200
    assert result.content.startswith("match x")


def test_binary_files_are_skipped(tmp_path: Path) -> None:
    make_tree(tmp_path, {"blob.bin": b"needle\xff\xfe", "text.txt": "needle\n"})

    assert [result.path for result in _engine(tmp_path).grep("needle")] == ["text.txt"]

"""File tool adapters for MCP exposure."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, assert_never

from projectfs.core.errors import ProjectFileError
from projectfs.core.grep_engine import DEFAULT_MAX_RESULTS
from projectfs.core.project_files import ProjectFiles

logger = logging.getLogger(__name__)

NO_FILES_MESSAGE = "No files found."
SUCCESS_MESSAGE = "Success!"


class FileOperation(str, Enum):
    """The closed set of project file tools."""

    LIST = "list_project_files"
    READ = "read_project_file"
    WRITE = "write_project_file"
    EDIT = "edit_project_file"
    GREP = "grep_project_files"


@dataclass(slots=True, frozen=True)
class ListFilesCall:
    glob_pattern: str | None = None
    include_ignored: bool = False


@dataclass(slots=True, frozen=True)
class ReadFileCall:
    path: str
    line_offset: int = 0
    count: int | None = None


@dataclass(slots=True, frozen=True)
class WriteFileCall:
    path: str
    content: str


@dataclass(slots=True, frozen=True)
class EditFileCall:
    path: str
    old_string: str
    new_string: str


@dataclass(slots=True, frozen=True)
class GrepFilesCall:
    pattern: str
    glob: str | None = None
    case_sensitive: bool = False
    max_results: int = DEFAULT_MAX_RESULTS


type FileToolCall = ListFilesCall | ReadFileCall | WriteFileCall | EditFileCall | GrepFilesCall


@dataclass(slots=True)
class ToolResult:
    """Textual tool outcome, optionally with structured content."""

    text: str
    is_error: bool = False
    structured: dict[str, Any] | None = field(default=None)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }
        if self.structured is not None:
            payload["structuredContent"] = self.structured
        return payload


def parse_file_tool_call(tool_name: str, arguments: dict[str, Any]) -> FileToolCall | None:
    """Parse MCP file tool call into one call variant.

    Returns `None` when the tool is not a file tool.
    Raises `ValueError` for malformed arguments.
    """
    try:
        operation = FileOperation(tool_name)
    except ValueError:
        return None

    match operation:
        case FileOperation.LIST:
            return ListFilesCall(
                glob_pattern=_optional_string(arguments, "glob_pattern"),
                include_ignored=_optional_bool(arguments, "include_ignored", default=False),
            )
        case FileOperation.READ:
            count = _optional_int(arguments, "count")
            return ReadFileCall(
                path=_required_string(arguments, "path"),
                line_offset=_optional_int(arguments, "line_offset") or 0,
                count=count if count else None,
            )
        case FileOperation.WRITE:
            return WriteFileCall(
                path=_required_string(arguments, "path"),
                content=_required_content(arguments, "content"),
            )
        case FileOperation.EDIT:
            return EditFileCall(
                path=_required_string(arguments, "path"),
                old_string=_required_content(arguments, "old_string"),
                new_string=_required_content(arguments, "new_string"),
            )
        case FileOperation.GREP:
            max_results = _optional_int(arguments, "max_results")
            return GrepFilesCall(
                pattern=_required_content(arguments, "pattern"),
                glob=_optional_string(arguments, "glob"),
                case_sensitive=_optional_bool(arguments, "case_sensitive", default=False),
                max_results=DEFAULT_MAX_RESULTS if max_results is None else max_results,
            )
        case _:
            assert_never(operation)


def run_file_tool(files: ProjectFiles, call: FileToolCall) -> ToolResult:
    """Execute one call; project file errors become error results."""
    try:
        return _dispatch(files, call)
    except ProjectFileError as exc:
        logger.debug("%s failed: %s", type(call).__name__, exc)
        return ToolResult(text=str(exc), is_error=True, structured={"code": exc.code})


def _dispatch(files: ProjectFiles, call: FileToolCall) -> ToolResult:
    match call:
        case ListFilesCall(glob_pattern=glob_pattern, include_ignored=include_ignored):
            listed = files.list_files(glob_pattern, include_ignored=include_ignored)
            return ToolResult(text="\n".join(listed) if listed else NO_FILES_MESSAGE)
        case ReadFileCall(path=path, line_offset=line_offset, count=count):
            return ToolResult(text=files.read_file(path, line_offset, count))
        case WriteFileCall(path=path, content=content):
            files.write_file(path, content)
            return ToolResult(text=SUCCESS_MESSAGE)
        case EditFileCall(path=path, old_string=old_string, new_string=new_string):
            files.edit_file(path, old_string, new_string)
            return ToolResult(text=SUCCESS_MESSAGE)
        case GrepFilesCall():
            results = files.grep(
                call.pattern,
                call.glob,
                case_sensitive=call.case_sensitive,
                max_results=call.max_results,
            )
            items = [result.model_dump() for result in results]
            return ToolResult(text=json.dumps(items), structured={"results": items})
        case _:
            assert_never(call)


def _required_string(arguments: dict[str, Any], key: str) -> str:
    value = arguments.get(key)
    if isinstance(value, str) and value.strip():
        return value
    msg = f"{key} is required"
    raise ValueError(msg)


def _required_content(arguments: dict[str, Any], key: str) -> str:
    value = arguments.get(key)
    if isinstance(value, str):
        return value
    msg = f"{key} is required"
    raise ValueError(msg)


def _optional_string(arguments: dict[str, Any], key: str) -> str | None:
    value = arguments.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    msg = f"{key} must be a string"
    raise ValueError(msg)


def _optional_bool(arguments: dict[str, Any], key: str, *, default: bool) -> bool:
    value = arguments.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    msg = f"{key} must be a boolean"
    raise ValueError(msg)


def _optional_int(arguments: dict[str, Any], key: str) -> int | None:
    value = arguments.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        msg = f"{key} must be an integer"
        raise ValueError(msg)
    if isinstance(value, int):
        return value
    # JSON clients may send whole numbers as floats.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    msg = f"{key} must be an integer"
    raise ValueError(msg)

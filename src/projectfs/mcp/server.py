"""MCP tool catalog for project file access."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final


@dataclass(slots=True)
class MCPTool:
    """MCP tool descriptor."""

    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


def _schema(properties: dict[str, dict[str, str]], required: list[str]) -> dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required}


_REGISTERED_TOOLS: Final[list[MCPTool]] = [
    MCPTool(
        name="list_project_files",
        description=(
            "Returns a list of files in the project. By default, when no arguments are passed, "
            "it returns all files in the project that are not ignored by .gitignore. "
            "Optionally, a glob_pattern can be passed to filter this list."
        ),
        input_schema=_schema(
            {
                "glob_pattern": {
                    "type": "string",
                    "description": "Optional: a glob pattern to filter the listed files.",
                },
                "include_ignored": {
                    "type": "boolean",
                    "description": (
                        "Optional: whether to include files that are ignored by .gitignore. "
                        "Defaults to false."
                    ),
                },
            },
            [],
        ),
    ),
    MCPTool(
        name="read_project_file",
        description=(
            "Returns the contents of the given file. Supports an optional line_offset and "
            "count. Only files inside the project root can be read."
        ),
        input_schema=_schema(
            {
                "path": {
                    "type": "string",
                    "description": "The path to the file to read, relative to the project root.",
                },
                "line_offset": {
                    "type": "integer",
                    "description": "Optional: the line to start reading from. Defaults to 0.",
                },
                "count": {
                    "type": "integer",
                    "description": "Optional: the number of lines to read. Defaults to all.",
                },
            },
            ["path"],
        ),
    ),
    MCPTool(
        name="write_project_file",
        description=(
            "Writes a file, overwriting it if it exists. An existing file must be read with "
            "read_project_file before it can be overwritten."
        ),
        input_schema=_schema(
            {
                "path": {
                    "type": "string",
                    "description": "The path to the file to write, relative to the project root.",
                },
                "content": {
                    "type": "string",
                    "description": "The content to write to the file",
                },
            },
            ["path", "content"],
        ),
    ),
    MCPTool(
        name="edit_project_file",
        description=(
            "Replaces one occurrence of old_string with new_string in a file. The file must "
            "be read with read_project_file first. If old_string is missing or occurs more "
            "than once, no edit is made; include surrounding lines to make it unique. "
            "Whitespace must match the file exactly."
        ),
        input_schema=_schema(
            {
                "path": {
                    "type": "string",
                    "description": "The path to the file to edit, relative to the project root.",
                },
                "old_string": {"type": "string", "description": "The string to search for"},
                "new_string": {
                    "type": "string",
                    "description": "The string to replace the old_string with",
                },
            },
            ["path", "old_string", "new_string"],
        ),
    ),
    MCPTool(
        name="grep_project_files",
        description=(
            "Searches for text patterns in files using regular expressions or plain text search."
        ),
        input_schema=_schema(
            {
                "pattern": {"type": "string", "description": "The pattern to search for"},
                "glob": {
                    "type": "string",
                    "description": (
                        'Optional glob pattern to filter which files to search, e.g. "**/*.py". '
                        "When a glob is given, .gitignore rules are not applied."
                    ),
                },
                "case_sensitive": {
                    "type": "boolean",
                    "description": "Whether the search is case-sensitive. Defaults to false.",
                },
                "max_results": {
                    "type": "integer",
                    "description": "Maximum number of results to return. Defaults to 100.",
                },
            },
            ["pattern"],
        ),
    ),
]


def registered_tools() -> list[MCPTool]:
    """Return all project file tools."""
    return list(_REGISTERED_TOOLS)


def find_tool(name: str) -> MCPTool | None:
    """Look up one MCP tool by name."""
    for tool in _REGISTERED_TOOLS:
        if tool.name == name:
            return tool
    return None

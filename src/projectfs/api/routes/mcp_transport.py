"""MCP JSON-RPC transport endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from projectfs.api.deps import get_project_files
from projectfs.core.project_files import ProjectFiles
from projectfs.mcp.server import find_tool, registered_tools
from projectfs.mcp.tools.file_tools import parse_file_tool_call, run_file_tool

router = APIRouter(tags=["mcp-transport"])

PROTOCOL_VERSION = "2025-11-25"


def _response(request_id: str | int | None, result: Any) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def _error(request_id: str | int | None, code: int, message: str) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "error": {
            "code": code,
            "message": message,
        },
    }


@router.post("/mcp")
async def mcp_transport(
    payload: dict[str, Any],
    files: ProjectFiles = Depends(get_project_files),
) -> dict[str, Any]:
    request_id = payload.get("id")
    method = payload.get("method")
    params = payload.get("params", {})

    if not isinstance(method, str):
        return _error(request_id, -32600, "Invalid method")
    if not isinstance(params, dict):
        return _error(request_id, -32602, "Invalid params")

    if method == "initialize":
        return _response(
            request_id,
            {
                "protocolVersion": PROTOCOL_VERSION,
                "serverInfo": {"name": "projectfs-mcp", "version": "0.1.0"},
                "capabilities": {"tools": {"listChanged": False}},
            },
        )

    if method in {"notifications/initialized", "ping"}:
        return _response(request_id, {})

    if method == "tools/list":
        return _response(request_id, {"tools": [tool.to_payload() for tool in registered_tools()]})

    if method == "tools/call":
        tool_name = params.get("name")
        arguments = params.get("arguments", {})
        if not isinstance(tool_name, str):
            return _error(request_id, -32602, "Missing tool name")
        if not isinstance(arguments, dict):
            return _error(request_id, -32602, "Invalid tool arguments")
        if find_tool(tool_name) is None:
            return _error(request_id, -32601, f"Unknown tool: {tool_name}")
        try:
            call = parse_file_tool_call(tool_name, arguments)
        except ValueError as exc:
            return _error(request_id, -32602, str(exc))
        if call is None:
            return _error(request_id, -32000, f"Tool handler not implemented: {tool_name}")
        result = await run_in_threadpool(run_file_tool, files, call)
        return _response(request_id, result.to_payload())

    return _error(request_id, -32601, f"Unknown method: {method}")

"""Project file routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from projectfs.api.deps import get_project_files
from projectfs.api.routes.common import http_error
from projectfs.api.schemas.files import (
    EditFileRequest,
    SearchRequest,
    SearchResponse,
    WriteFileRequest,
)
from projectfs.core.errors import ProjectFileError
from projectfs.core.project_files import ProjectFiles

router = APIRouter(prefix="/api/v1/files", tags=["files"])


@router.get("")
async def list_files(
    glob_pattern: str | None = None,
    include_ignored: bool = False,
    files: ProjectFiles = Depends(get_project_files),
) -> dict[str, list[str]]:
    try:
        listed = await run_in_threadpool(
            files.list_files, glob_pattern, include_ignored=include_ignored
        )
    except ProjectFileError as exc:
        raise http_error(exc) from exc
    return {"files": listed}


@router.post("/search", response_model=SearchResponse)
async def search_files(
    request: SearchRequest,
    files: ProjectFiles = Depends(get_project_files),
) -> SearchResponse:
    try:
        results = await run_in_threadpool(
            files.grep,
            request.pattern,
            request.glob,
            case_sensitive=request.case_sensitive,
            max_results=request.max_results,
        )
    except ProjectFileError as exc:
        raise http_error(exc) from exc
    return SearchResponse(results=results)


@router.get("/{file_path:path}")
async def read_file(
    file_path: str,
    line_offset: int = 0,
    count: int | None = None,
    files: ProjectFiles = Depends(get_project_files),
) -> dict[str, str]:
    try:
        content = await run_in_threadpool(files.read_file, file_path, line_offset, count)
    except ProjectFileError as exc:
        raise http_error(exc) from exc
    return {"content": content}


@router.put("/{file_path:path}")
async def write_file(
    file_path: str,
    request: WriteFileRequest,
    files: ProjectFiles = Depends(get_project_files),
) -> dict[str, str]:
    try:
        await run_in_threadpool(files.write_file, file_path, request.content)
    except ProjectFileError as exc:
        raise http_error(exc) from exc
    return {"status": "updated"}


@router.patch("/{file_path:path}")
async def edit_file(
    file_path: str,
    request: EditFileRequest,
    files: ProjectFiles = Depends(get_project_files),
) -> dict[str, str]:
    try:
        await run_in_threadpool(files.edit_file, file_path, request.old_string, request.new_string)
    except ProjectFileError as exc:
        raise http_error(exc) from exc
    return {"status": "edited"}

"""File API schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from projectfs.core.grep_engine import DEFAULT_MAX_RESULTS
from projectfs.models.grep import GrepResult


class WriteFileRequest(BaseModel):
    """Write file payload."""

    content: str


class EditFileRequest(BaseModel):
    """Single find/replace payload."""

    old_string: str
    new_string: str


class SearchRequest(BaseModel):
    """Search request payload."""

    pattern: str
    glob: str | None = None
    case_sensitive: bool = False
    max_results: int = Field(default=DEFAULT_MAX_RESULTS, ge=0)


class SearchResponse(BaseModel):
    results: list[GrepResult]

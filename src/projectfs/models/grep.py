"""Search result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class GrepResult(BaseModel):
    """One matching line."""

    model_config = ConfigDict(frozen=True)

    path: str
    line: int
    content: str

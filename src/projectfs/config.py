"""Runtime settings and logging setup."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from projectfs.core.file_editor import DEFAULT_MAX_FILE_SIZE

ENV_PREFIX = "PROJECTFS_"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings(BaseModel):
    """Server settings."""

    root: Path = Field(default_factory=Path.cwd)
    max_file_size: int = Field(default=DEFAULT_MAX_FILE_SIZE, gt=0)
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=0, le=65535)

    @field_validator("root")
    @classmethod
    def _root_must_be_directory(cls, value: Path) -> Path:
        resolved = value.expanduser().resolve()
        if not resolved.is_dir():
            msg = f"root is not a directory: {value}"
            raise ValueError(msg)
        return resolved

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"unknown log level: {value}"
            raise ValueError(msg)
        return level


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from `PROJECTFS_*` environment variables."""
    source = os.environ if environ is None else environ
    values: dict[str, Any] = {}
    for name in Settings.model_fields:
        raw = source.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw.strip():
            values[name] = raw.strip()
    return Settings.model_validate(values)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)

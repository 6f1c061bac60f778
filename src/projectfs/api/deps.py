"""Shared API dependency providers."""

from __future__ import annotations

from fastapi import Request

from projectfs.core.project_files import ProjectFiles


def get_project_files(request: Request) -> ProjectFiles:
    files: ProjectFiles = request.app.state.project_files
    return files

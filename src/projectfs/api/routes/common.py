"""Common route helpers."""

from __future__ import annotations

from fastapi import HTTPException, status

from projectfs.core.errors import (
    AmbiguousEditError,
    FileAccessError,
    InvalidArgumentError,
    InvalidPatternError,
    NotFoundError,
    NotTextError,
    NotTrackedError,
    ProjectFileError,
    SandboxViolationError,
    StaleFileError,
    TooLargeError,
)

_STATUS_BY_ERROR: dict[type[ProjectFileError], int] = {
    SandboxViolationError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    TooLargeError: status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    NotTextError: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    NotTrackedError: status.HTTP_409_CONFLICT,
    StaleFileError: status.HTTP_409_CONFLICT,
    AmbiguousEditError: status.HTTP_409_CONFLICT,
    InvalidPatternError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidArgumentError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    FileAccessError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def http_error(exc: ProjectFileError) -> HTTPException:
    """Map a project file error onto an HTTP error response."""
    status_code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=status_code, detail={"code": exc.code, "message": str(exc)})

"""
Custom exceptions for the folder engine.
Separates business exceptions from HTTP exceptions.
"""
from fastapi import HTTPException, status


class FolderEngineError(Exception):
    """Base class for business errors raised by the folder engine."""
    kind = "FolderEngineError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FolderEngineError):
    """Raised when a name, description, type or role list is malformed."""
    kind = "ValidationError"


class DuplicateNameError(FolderEngineError):
    """Raised when a sibling already uses the same name."""
    kind = "DuplicateNameError"


class CycleError(FolderEngineError):
    """Raised when a move would make a folder its own ancestor."""
    kind = "CycleError"


class NotFoundError(FolderEngineError):
    """Raised when a folder, parent or site is unknown."""
    kind = "NotFoundError"


class PermissionDenied(FolderEngineError):
    """Raised when the caller role is not allowed on the folder."""
    kind = "PermissionDenied"


class NotEmptyError(FolderEngineError):
    """Raised when a non-recursive delete targets a folder with children."""
    kind = "NotEmptyError"


_STATUS_BY_ERROR = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    DuplicateNameError: status.HTTP_409_CONFLICT,
    CycleError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    PermissionDenied: status.HTTP_403_FORBIDDEN,
    NotEmptyError: status.HTTP_409_CONFLICT,
}


def status_code_for(e: Exception) -> int:
    for error_class, code in _STATUS_BY_ERROR.items():
        if isinstance(e, error_class):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def handle_business_exception(e: Exception) -> HTTPException:
    """
    Convert business exceptions to HTTP exceptions.
    This keeps business logic clean of HTTP concerns.
    """
    if isinstance(e, FolderEngineError):
        return HTTPException(
            status_code=status_code_for(e),
            detail={"error": e.kind, "message": e.message}
        )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

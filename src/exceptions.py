"""Application error taxonomy.

Services raise these; the handlers registered in ``src.main`` render them as
``{"error": ..., "details": ...}`` with the matching status code.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(AppError):
    """Missing or invalid fields."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(AppError):
    """The requested row does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    """A uniqueness rule would be violated."""

    status_code = status.HTTP_409_CONFLICT


class InternalError(AppError):
    """Storage or connectivity failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

"""Domain errors raised by the service layer.

Each error is an ``HTTPException`` carrying its own status code, so routes
let them propagate and FastAPI renders ``{"detail": ...}`` unchanged.
"""

from typing import Any

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """Malformed or disallowed input, rejected before anything is persisted."""

    def __init__(self, detail: Any = "Invalid input", field: str | None = None):
        if field is not None and isinstance(detail, str):
            detail = {"field": field, "message": detail}
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: Any = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: Any = "Resource already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class StorageWriteError(HTTPException):
    def __init__(self, detail: Any = "Failed to store file"):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


class TransactionError(HTTPException):
    """Persistence failure (connection loss, deadlock, ...). Never retried."""

    def __init__(self, detail: Any = "Database transaction failed"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)

# exceptions.py
from fastapi import status


class AppError(Exception):
    """Base class for errors reported back to the caller."""

    code = "APP_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Raised when input is malformed or out of range."""

    code = "VALIDATION_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input."


class InvalidTransitionError(ValidationError):
    """Raised when a status change has no edge from the current status."""

    code = "INVALID_TRANSITION"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Status transition is not allowed."


class AuthorizationError(AppError):
    """Raised when the caller is not the party the operation requires."""

    code = "UNAUTHORIZED"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized"


class NotFoundError(AppError):
    """Raised when a referenced row does not exist."""

    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class StoreError(AppError):
    """Raised when the row-store fails; carries its message verbatim."""

    code = "STORE_ERROR"
    default_message = "Database operation failed."


class ConstraintViolationError(StoreError):
    """Raised when a write violates a table constraint, e.g. a unique key."""

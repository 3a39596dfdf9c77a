"""
Application errors raised by the service layer.

Each error carries the HTTP status the API layer renders it with, so routes
never translate errors themselves.
"""
from fastapi import status


class AppError(Exception):
    """Base application error class."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or invalid fields."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class InvalidIdError(ValidationError):
    """A path or query identifier that is not a well-formed UUID."""

    default_message = "Invalid ID"


class DuplicateError(AppError):
    """Unique-constraint conflict on a staff field."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Record already exists"

    def __init__(self, message: str = None, field: str = None):
        self.field = field
        super().__init__(message)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"

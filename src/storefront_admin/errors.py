from abc import ABC


class UserError(ABC, Exception):
    """Base class for errors whose message is shown to the admin user.

    Messages must not contain connection strings, stack traces or any
    other internal detail.
    """


class NotFoundError(UserError):
    """Raised when a requested record is not found."""

    def __init__(self, message: str = "Record not found") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when input is missing or malformed, before any database call."""


class RemoteOperationError(UserError):
    """Raised when the database rejects an operation or cannot be reached."""

    def __init__(self, message: str = "Database operation failed") -> None:
        super().__init__(message)


class FetchError(RemoteOperationError):
    """Raised when reading records fails."""

    def __init__(self, message: str = "Failed to load records") -> None:
        super().__init__(message)


class DuplicateRecordError(RemoteOperationError):
    """Raised when a write violates a unique index."""

    def __init__(self, message: str = "Record already exists") -> None:
        super().__init__(message)

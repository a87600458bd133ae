"""Failure taxonomy shared by the service clients and screen controllers."""

from __future__ import annotations

DATABASE_CONNECTION_MESSAGE = "Database connection error. Please make sure MongoDB is running."
NETWORK_ERROR_MESSAGE = "Unable to reach the server. Please check your connection."


class DirectoryError(Exception):
    """Base class for every failure a screen renders as a banner."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DraftValidationError(DirectoryError):
    """A draft failed local validation; nothing was sent."""

    def __init__(self, errors: dict[str, str], message: str = "Please correct the highlighted fields.") -> None:
        super().__init__(message)
        self.errors = errors


class NetworkError(DirectoryError):
    """The API could not be reached or did not answer in time."""

    def __init__(self, message: str = NETWORK_ERROR_MESSAGE) -> None:
        super().__init__(message)


class RemoteValidationError(DirectoryError):
    """The API rejected the request with field-level detail."""

    def __init__(self, message: str, errors: dict[str, str], status_code: int) -> None:
        super().__init__(message)
        self.errors = errors
        self.status_code = status_code


class RemoteFailureError(DirectoryError):
    """The API rejected the request without field-level detail."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(RemoteFailureError):
    pass


class AuthenticationError(RemoteFailureError):
    pass


class DatabaseConnectionError(RemoteFailureError):
    def __init__(self, status_code: int | None = None) -> None:
        super().__init__(DATABASE_CONNECTION_MESSAGE, status_code)

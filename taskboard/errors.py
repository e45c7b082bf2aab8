"""Application errors and their HTTP representation."""

from __future__ import annotations

from http import HTTPStatus


class AppError(Exception):
    """Base class for every error the service reports to a client."""

    status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> tuple[str, int]:
        """Return the response body and HTTP status code for this error."""
        return self.message, int(self.status_code)


class DatabaseError(AppError):
    """A storage operation failed; the detail is kept but not shown to clients."""

    def __init__(self, detail: str = "") -> None:
        super().__init__("Database error")
        self.detail = detail


class ValidationError(AppError):
    """Input sent by the client was rejected."""

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, detail: str) -> None:
        super().__init__(f"Validation failed: {detail}")
        self.detail = detail


class NotFoundError(AppError):
    """The requested task does not exist."""

    status_code = HTTPStatus.NOT_FOUND

    def __init__(self) -> None:
        super().__init__("Task not found")


class ServerError(AppError):
    """The server itself could not be set up or run."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Server error: {detail}")
        self.detail = detail


class MigrationError(AppError):
    """The database schema could not be applied."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Migration error: {detail}")
        self.detail = detail


class ParsePriorityError(AppError):
    """A priority name could not be recognised."""

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, detail: str) -> None:
        super().__init__(f"Parsing priority error: {detail}")
        self.detail = detail


class ParseStatusError(AppError):
    """A status name could not be recognised."""

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, detail: str) -> None:
        super().__init__(f"Parsing status error: {detail}")
        self.detail = detail
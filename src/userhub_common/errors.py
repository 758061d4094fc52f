"""Service-level error taxonomy.

Errors raised by the service layer carry an ``ErrorKind``. The HTTP layer maps
kinds to status codes, so nothing here knows about HTTP.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Classification of a service failure."""

    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class ServiceError(Exception):
    """Base class for expected, user-visible service failures."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def to_dict(self) -> dict[str, str]:
        """Serialize the error for a response body."""
        return {"kind": self.kind.value, "message": self.message}


class BadRequestError(ServiceError):
    kind = ErrorKind.BAD_REQUEST


class UnauthorizedError(ServiceError):
    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(ServiceError):
    kind = ErrorKind.FORBIDDEN


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(ServiceError):
    kind = ErrorKind.CONFLICT

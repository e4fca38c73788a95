"""Error Hierarchy — closed taxonomy of every failure the API can report.

Invariants:
    - Every error carries a kind (ErrorKind), a client-safe message and an HTTP status
    - ErrorKind is closed: new failure modes map onto an existing kind
    - to_response() produces the wire envelope {success: false, error: message}
    - The kind is for logs and tests only, never serialized to the client

Design Decisions:
    - Single hierarchy with ApiError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - One subclass per kind, constructed where the failure is detected, so the
      normalizer never has to guess a category from loose attributes
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Every category of failure surfaced to API clients."""
    INVALID_REFERENCE = "invalid_reference"
    DUPLICATE_VALUE = "duplicate_value"
    VALIDATION_FAILED = "validation_failed"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class ApiError(Exception):
    """Base exception for all errors that reach the client."""

    def __init__(self, message: str, kind: ErrorKind, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the standardized REST error envelope."""
        return {"success": False, "error": self.message}

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value!r}, "
            f"status={self.http_status}, message={self.message!r})"
        )


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidReferenceError(ApiError):
    """Identifier does not have a valid shape."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, ErrorKind.INVALID_REFERENCE, 404)


class DuplicateValueError(ApiError):
    """Unique field collided with an existing row."""
    def __init__(self, message: str = "Duplicate field value entered"):
        super().__init__(message, ErrorKind.DUPLICATE_VALUE, 400)


class ValidationFailedError(ApiError):
    """Body or query parameter rejected before reaching the database."""
    def __init__(self, message: str, details: list[str] | None = None):
        super().__init__(message, ErrorKind.VALIDATION_FAILED, 400)
        self.details = details or [message]


class UnauthorizedError(ApiError):
    """Missing credentials, or actor does not own the resource."""
    def __init__(self, message: str = "Not authorized to access this route"):
        super().__init__(message, ErrorKind.UNAUTHORIZED, 401)


class ForbiddenError(ApiError):
    """Actor's role is not allowed on this route."""
    def __init__(self, message: str):
        super().__init__(message, ErrorKind.FORBIDDEN, 403)


class NotFoundError(ApiError):
    """Well-formed identifier that matches no row."""
    def __init__(self, message: str):
        super().__init__(message, ErrorKind.NOT_FOUND, 404)


# ─── Server Errors (500-level) ──────────────────────────────────

class UnknownError(ApiError):
    """Anything the normalizer could not classify."""
    def __init__(self, message: str = "Server Error"):
        super().__init__(message, ErrorKind.UNKNOWN, 500)

"""Error Handlers — the single point where any failure becomes the wire error envelope.

Invariants:
    - normalize() maps every exception to an ApiError and never raises
    - Every raw error is logged before normalize() returns
    - Responses are {success: false, error: message}; ErrorKind is never sent
    - Unclassified errors answer 500 "Server Error" (no internal details leak)

Design Decisions:
    - One normalize() shared by all registered handlers: routes never build error JSON
    - Handlers registered per exception family instead of one catch-all, because
      Starlette re-raises after running an Exception handler; the catch-all stays
      as the last resort for anything else
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError, StatementError
from starlette.exceptions import HTTPException as StarletteHTTPException

from devcamper.core.errors import (
    ApiError,
    DuplicateValueError,
    ErrorKind,
    InvalidReferenceError,
    UnknownError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

_UNIQUE_VIOLATION_SQLSTATE = "23505"
_INVALID_TEXT_REPRESENTATION_SQLSTATE = "22P02"
_VALUE_ERROR_PREFIX = "Value error, "

_STATUS_KINDS = {
    400: ErrorKind.VALIDATION_FAILED,
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    for exc_class in (
        ApiError,
        RequestValidationError,
        StarletteHTTPException,
        SQLAlchemyError,
        Exception,
    ):
        app.add_exception_handler(exc_class, handle_error)


async def handle_error(request: Request, exc: Exception) -> JSONResponse:
    """Normalize any exception and render the error envelope."""
    return error_response(normalize(exc, path=request.url.path))


def error_response(error: ApiError) -> JSONResponse:
    return JSONResponse(status_code=error.http_status, content=error.to_response())


# ─── Normalization ──────────────────────────────────────────────

def normalize(raw_error: BaseException, path: str | None = None) -> ApiError:
    """Translate any raised failure into an ApiError."""
    try:
        error = _classify(raw_error)
    except Exception:
        logger.exception("Error normalizer failed; answering 500")
        error = UnknownError()
    _log(raw_error, error, path)
    return error


def _classify(raw_error: BaseException) -> ApiError:
    if isinstance(raw_error, ApiError):
        return raw_error
    if isinstance(raw_error, (RequestValidationError, ValidationError)):
        return _validation_failed(raw_error.errors())
    if isinstance(raw_error, IntegrityError):
        if _is_unique_violation(raw_error):
            return DuplicateValueError()
        return UnknownError()
    if _is_malformed_identifier(raw_error):
        return InvalidReferenceError()
    if isinstance(raw_error, StarletteHTTPException):
        return ApiError(
            str(raw_error.detail),
            _STATUS_KINDS.get(raw_error.status_code, ErrorKind.UNKNOWN),
            raw_error.status_code,
        )
    return UnknownError()


def _validation_failed(errors) -> ValidationFailedError:
    messages = [_format_validation_message(e) for e in errors]
    return ValidationFailedError(", ".join(messages), details=messages)


def _format_validation_message(error: dict) -> str:
    msg = str(error.get("msg", "Invalid value"))
    # Messages raised by our own validators are already client-facing
    if msg.startswith(_VALUE_ERROR_PREFIX):
        return msg[len(_VALUE_ERROR_PREFIX):]
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def _sqlstate(raw_error: StatementError) -> str | None:
    orig = getattr(raw_error, "orig", None)
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _is_unique_violation(raw_error: IntegrityError) -> bool:
    if _sqlstate(raw_error) == _UNIQUE_VIOLATION_SQLSTATE:
        return True
    text = str(getattr(raw_error, "orig", raw_error)).lower()
    return "unique constraint" in text or "duplicate key" in text


def _is_malformed_identifier(raw_error: BaseException) -> bool:
    """Driver or bind-time rejection of an identifier's shape."""
    if isinstance(raw_error, DataError):
        return _sqlstate(raw_error) == _INVALID_TEXT_REPRESENTATION_SQLSTATE
    if isinstance(raw_error, StatementError):
        return isinstance(raw_error.orig, ValueError)
    return False


def _describe(raw_error: BaseException) -> str:
    try:
        return f"{type(raw_error).__name__}: {raw_error}"
    except Exception:
        return type(raw_error).__name__


def _log(raw_error: BaseException, error: ApiError, path: str | None) -> None:
    extra = {
        "error_code": error.kind.value,
        "http_status": error.http_status,
        "path": path,
    }
    if error.kind == ErrorKind.UNKNOWN:
        logger.error(
            f"Unhandled error on {path}: {_describe(raw_error)}",
            extra=extra,
            exc_info=(type(raw_error), raw_error, raw_error.__traceback__),
        )
    else:
        logger.warning(
            f"{type(raw_error).__name__} on {path}: {error.message}", extra=extra,
        )

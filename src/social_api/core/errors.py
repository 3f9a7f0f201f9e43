"""Error taxonomy and the classifier that maps failures onto it.

Every failure leaving the service goes through :func:`classify`. Domain code
raises a :class:`ServiceError` subclass that already carries its final kind;
persistence and validation faults are pattern-matched onto the taxonomy, and
anything else collapses into a generic internal error.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Final

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, NoResultFound
from sqlalchemy.orm.exc import ObjectDeletedError, StaleDataError
from starlette.exceptions import HTTPException as StarletteHTTPException

from social_api.schemas.error import ExternalError

logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    """Closed set of externally visible error kinds."""

    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    UNAUTHORIZED = "UNAUTHORIZED"
    CONFLICT = "CONFLICT"
    BAD_USER_INPUT = "BAD_USER_INPUT"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    INTERNAL_ERROR = "INTERNAL_SERVER_ERROR"

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self]


STATUS_CODES: Final[dict[ErrorKind, int]] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.UNAUTHORIZED: 403,
    ErrorKind.CONFLICT: 409,
    ErrorKind.BAD_USER_INPUT: 400,
    ErrorKind.RATE_LIMIT_EXCEEDED: 429,
    ErrorKind.INTERNAL_ERROR: 500,
}

INTERNAL_ERROR_MESSAGE: Final[str] = "Internal server error"

# Driver-specific markers for unique constraint violations.
_UNIQUE_VIOLATION_MARKERS: Final[tuple[str, ...]] = (
    "unique constraint failed",  # sqlite
    "duplicate key value violates unique constraint",  # postgresql
    "duplicate entry",  # mysql
)
_UNIQUE_VIOLATION_SQLSTATE: Final[str] = "23505"

# Framework-level HTTP failures (unknown route, wrong method) by status.
_HTTP_STATUS_KINDS: Final[dict[int, ErrorKind]] = {
    401: ErrorKind.UNAUTHENTICATED,
    403: ErrorKind.UNAUTHORIZED,
    404: ErrorKind.NOT_FOUND,
    429: ErrorKind.RATE_LIMIT_EXCEEDED,
}


class ServiceError(Exception):
    """Base class for failures that already carry their external kind."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_external(self) -> ExternalError:
        return ExternalError(
            kind=self.kind.value,
            message=self.message,
            status=self.status_code,
            details=self.details,
        )


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, details: Any | None = None) -> None:
        super().__init__(f"{resource} not found", details)
        self.resource = resource


class ValidationError(ServiceError):
    kind = ErrorKind.VALIDATION_ERROR


class AuthenticationError(ServiceError):
    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, message: str = "Not authenticated", details: Any | None = None) -> None:
        super().__init__(message, details)


class AuthorizationError(ServiceError):
    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Not authorized", details: Any | None = None) -> None:
        super().__init__(message, details)


class ConflictError(ServiceError):
    kind = ErrorKind.CONFLICT


class BadUserInputError(ServiceError):
    kind = ErrorKind.BAD_USER_INPUT


class RateLimitError(ServiceError):
    kind = ErrorKind.RATE_LIMIT_EXCEEDED

    def __init__(self, message: str = "Too many requests", details: Any | None = None) -> None:
        super().__init__(message, details)


class InternalServerError(ServiceError):
    kind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE, details: Any | None = None) -> None:
        super().__init__(message, details)


class MissingRowError(LookupError):
    """Raised by repositories when an update or delete targets no row."""

    def __init__(self, table: str, row_id: object) -> None:
        super().__init__(f"Record to update not found: {table}.id={row_id!r}")
        self.table = table
        self.row_id = row_id


def is_unique_violation(error: IntegrityError) -> bool:
    """Return True if the integrity error was caused by a uniqueness constraint."""
    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == _UNIQUE_VIOLATION_SQLSTATE:
        return True
    text = str(orig if orig is not None else error).lower()
    return any(marker in text for marker in _UNIQUE_VIOLATION_MARKERS)


def _external(kind: ErrorKind, message: str, details: Any | None = None) -> ExternalError:
    return ExternalError(kind=kind.value, message=message, status=kind.status_code, details=details)


def _classify_http(failure: StarletteHTTPException) -> ExternalError:
    status = failure.status_code
    if status >= 500:
        logger.error("HTTP error %d", status, exc_info=failure)
        return _external(ErrorKind.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)

    kind = _HTTP_STATUS_KINDS.get(status, ErrorKind.BAD_USER_INPUT)
    message = failure.detail if isinstance(failure.detail, str) else kind.value
    logger.warning("HTTP error %d: %s", status, message)
    # Other 4xx codes such as 405 keep their own status.
    return ExternalError(kind=kind.value, message=message, status=status)


def classify(failure: BaseException) -> ExternalError:
    """Map any failure onto the external error taxonomy.

    Args:
        failure: The exception raised while serving a request.

    Returns:
        The single error shape allowed to cross the service boundary.
    """
    if isinstance(failure, ServiceError):
        logger.warning(
            "Service error: %s",
            failure.message,
            extra={"code": failure.kind.value, "details": failure.details},
        )
        return failure.to_external()

    if isinstance(failure, StarletteHTTPException):
        return _classify_http(failure)

    if isinstance(failure, IntegrityError) and is_unique_violation(failure):
        logger.error("Database error", exc_info=failure)
        return _external(ErrorKind.CONFLICT, "Resource already exists")

    if isinstance(failure, MissingRowError | NoResultFound | StaleDataError | ObjectDeletedError):
        logger.error("Database error", exc_info=failure)
        return _external(ErrorKind.NOT_FOUND, "Resource not found")

    if isinstance(failure, PydanticValidationError | RequestValidationError):
        logger.warning("Validation error: %s", failure)
        return _external(ErrorKind.BAD_USER_INPUT, "Validation failed", details=str(failure))

    logger.error("Unexpected error", exc_info=failure)
    return _external(ErrorKind.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)

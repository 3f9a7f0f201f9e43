"""Global exception handlers: every failure leaves through the classifier."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from social_api.core.errors import MissingRowError, ServiceError, classify

logger = logging.getLogger(__name__)

_CLASSIFIED_EXCEPTIONS: tuple[type[BaseException], ...] = (
    ServiceError,
    StarletteHTTPException,
    RequestValidationError,
    PydanticValidationError,
    SQLAlchemyError,
    MissingRowError,
    Exception,
)


async def classified_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any exception as an ExternalError body."""
    error = classify(exc)
    if error.status >= 500:
        logger.error("Server error on %s %s: %s", request.method, request.url.path, error.kind)
    # Keeps framework headers such as Allow on a 405.
    headers = getattr(exc, "headers", None) if isinstance(exc, StarletteHTTPException) else None
    return JSONResponse(
        status_code=error.status,
        content=error.model_dump(exclude_none=True),
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register the classifier for domain, HTTP, validation, database and unexpected errors."""
    for exc_type in _CLASSIFIED_EXCEPTIONS:
        app.add_exception_handler(exc_type, classified_error_handler)  # type: ignore[arg-type]

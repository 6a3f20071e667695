"""Exception handlers producing the ``{success: false, ...}`` envelope."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import (
    BlogError,
    ConflictError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from app.core.logging import get_logger
from app.schemas.common import ErrorResponse, FieldErrorSchema

logger = get_logger(__name__)

SERVER_ERROR_MESSAGE = "Server Error"

# Request locations FastAPI prefixes onto field paths
_LOCATION_PARTS = {"body", "query", "path", "header", "cookie"}


def blog_error_response(exc: BlogError) -> JSONResponse:
    """Create a JSON error response from a BlogError."""
    if isinstance(exc, ValidationError):
        status_code = 400
        content = ErrorResponse(
            error=exc.message,
            errors=[FieldErrorSchema(field=e.field, message=e.message) for e in exc.errors],
        )
    elif isinstance(exc, NotFoundError):
        status_code = 404
        content = ErrorResponse(error=exc.message)
    elif isinstance(exc, ConflictError):
        status_code = 400
        content = ErrorResponse(error=exc.message)
    else:
        # StorageUnavailableError and anything unclassified
        status_code = 500
        content = ErrorResponse(error=SERVER_ERROR_MESSAGE)

    return JSONResponse(
        status_code=status_code,
        content=content.model_dump(exclude_none=True),
    )


def _field_name(loc: tuple) -> str:
    parts = [str(part) for part in loc if part not in _LOCATION_PARTS]
    return ".".join(parts) or "request"


async def blog_error_handler(request: Request, exc: BlogError) -> JSONResponse:
    if isinstance(exc, StorageUnavailableError):
        logger.error("storage_unavailable", path=request.url.path, error=exc.message)
    return blog_error_response(exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        FieldErrorSchema(field=_field_name(tuple(err.get("loc", ()))), message=err.get("msg", ""))
        for err in exc.errors()
    ]
    logger.debug("request_validation_failed", path=request.url.path, errors=len(errors))
    content = ErrorResponse(error="Validation failed", errors=errors)
    return JSONResponse(status_code=400, content=content.model_dump())


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    content = ErrorResponse(error=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=content.model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", method=request.method, path=request.url.path)
    content = ErrorResponse(error=SERVER_ERROR_MESSAGE)
    return JSONResponse(status_code=500, content=content.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    """Install all error handlers on the application."""
    app.add_exception_handler(BlogError, blog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

"""Exception handlers for the IDE FastAPI application.

Services raise the domain errors from models.errors; the handlers here turn
them (and a few builtin exceptions) into consistent JSON responses of the
form ``{"error": ..., "detail": ..., "type": ...}``.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from models.errors import InvalidStateError, NotFoundError, TemplateLoadError

logger = logging.getLogger(__name__)


async def not_found_handler(request: Request, exc: NotFoundError):
    """Handle NotFoundError exceptions.

    Returns a 404 naming what kind of thing was missing and its key.

    Args:
        request: The incoming request that triggered the error.
        exc: The NotFoundError exception.

    Returns:
        JSONResponse with 404 status.
    """
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Not Found",
            "detail": exc.message,
            "type": "NotFoundError",
            "kind": exc.kind,
            "key": exc.key,
        },
    )


async def invalid_state_handler(request: Request, exc: InvalidStateError):
    """Handle InvalidStateError (and NoCommitError) exceptions.

    Returns a 409 (Conflict): the request is well formed but cannot be
    applied to the current state, e.g. committing before ``init``.

    Args:
        request: The incoming request that triggered the error.
        exc: The InvalidStateError exception.

    Returns:
        JSONResponse with 409 status.
    """
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "error": "Invalid State",
            "detail": exc.message,
            "type": type(exc).__name__,
        },
    )


async def template_load_error_handler(request: Request, exc: TemplateLoadError):
    """Handle TemplateLoadError exceptions.

    A broken manifest is a server-side data problem, so this is a 500.

    Args:
        request: The incoming request that triggered the error.
        exc: The TemplateLoadError exception.

    Returns:
        JSONResponse with 500 status and the offending path.
    """
    logger.error(f"Template load failed: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Template Load Error",
            "detail": exc.message,
            "type": "TemplateLoadError",
            "path": exc.path,
        },
    )


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors raised outside request parsing.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValidationError exception.

    Returns:
        JSONResponse with validation error details.
    """
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation Error",
            "detail": "The request data failed validation",
            "type": "ValidationError",
            "validation_errors": exc.errors(include_url=False, include_context=False),
        },
    )


async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions.

    ValueErrors indicate input that passed request validation but was
    rejected by a service, such as a blank commit message or a path that
    escapes the project directory.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValueError exception.

    Returns:
        JSONResponse with 400 status.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid Value",
            "detail": str(exc),
            "type": "ValueError",
        },
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions.

    Logs the traceback and returns a generic message so stack traces are
    never exposed to clients.

    Args:
        request: The incoming request that triggered the error.
        exc: The exception that was raised.

    Returns:
        JSONResponse with generic error message.
    """
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "type": type(exc).__name__,
        },
    )

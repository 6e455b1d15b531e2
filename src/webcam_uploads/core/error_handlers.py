"""Centralized translation of failures into JSON error responses."""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from webcam_uploads.core.config import Settings
from webcam_uploads.core.constants import (
    ERROR_INTERNAL,
    ERROR_INVALID_REQUEST,
    ERROR_NOT_FOUND,
    ERROR_RATE_LIMITED,
)
from webcam_uploads.core.errors import (
    ClientInputError,
    ImageServiceError,
    NotFoundError,
    RateLimitError,
)
from webcam_uploads.core.models import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(
    request: Request,
    *,
    status_code: int,
    message: str,
    error_details: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    settings: Settings = request.app.state.settings
    body = ErrorResponse(
        message=message,
        errorDetails=None if settings.is_production else error_details,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def _log_failure(request: Request, status_code: int, exc: Exception) -> None:
    if status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
        logger.error(
            "%s %s failed with %d",
            request.method,
            request.url.path,
            status_code,
            exc_info=exc,
        )
    else:
        logger.warning(
            "%s %s rejected with %d: %s",
            request.method,
            request.url.path,
            status_code,
            exc,
        )


async def service_error_handler(request: Request, exc: ImageServiceError) -> JSONResponse:
    """Handle errors raised by the service itself."""
    _log_failure(request, exc.status_code, exc)
    details = f"{exc.message} {exc.details}" if exc.details else exc.message
    if exc.__cause__ is not None:
        details = f"{details}: {exc.__cause__!r}"
    return _error_response(
        request,
        status_code=exc.status_code,
        message=exc.message,
        error_details=details,
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle framework HTTP errors such as static 404s and bad multipart."""
    error = (
        NotFoundError(message=ERROR_NOT_FOUND)
        if exc.status_code == HTTPStatus.NOT_FOUND
        else ImageServiceError(message=str(exc.detail), status_code=exc.status_code)
    )
    _log_failure(request, error.status_code, exc)
    return _error_response(
        request,
        status_code=error.status_code,
        message=error.message,
        error_details=str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request parsing failures as client input errors."""
    error = ClientInputError(message=ERROR_INVALID_REQUEST)
    _log_failure(request, error.status_code, exc)
    return _error_response(
        request,
        status_code=error.status_code,
        message=error.message,
        error_details=str(exc.errors()),
    )


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle slowapi rejections with a fixed retry-after message."""
    error = RateLimitError(message=ERROR_RATE_LIMITED)
    _log_failure(request, error.status_code, exc)
    response = _error_response(
        request,
        status_code=error.status_code,
        message=error.message,
        error_details=str(exc.detail),
    )
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    if view_rate_limit is not None:
        response = request.app.state.limiter._inject_headers(  # noqa: SLF001
            response,
            view_rate_limit,
        )
    return response


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for anything unexpected."""
    _log_failure(request, HTTPStatus.INTERNAL_SERVER_ERROR, exc)
    return _error_response(
        request,
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        message=ERROR_INTERNAL,
        error_details=repr(exc),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach every error handler to the app."""
    app.add_exception_handler(ImageServiceError, service_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

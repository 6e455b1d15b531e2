"""Exception classes for the upload service."""

from http import HTTPStatus
from typing import Any


class ImageServiceError(Exception):
    """
    Base exception for all upload service errors.

    Every error carries the HTTP status the Error Responder should send and a
    message that is safe to show to clients. Internal context goes into
    `details` and is only exposed outside production.
    """

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    message: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}

        super().__init__(self.message)


class ClientInputError(ImageServiceError):
    """Raised when the request is missing a file or is malformed."""

    status_code = HTTPStatus.BAD_REQUEST


class FileTooLargeError(ClientInputError):
    """Raised when an uploaded file exceeds the size ceiling."""

    status_code = HTTPStatus.REQUEST_ENTITY_TOO_LARGE


class UnsupportedImageError(ClientInputError):
    """Raised when content verification rejects the uploaded bytes."""


class RateLimitError(ImageServiceError):
    """Raised when a client address exceeds the upload rate limit."""

    status_code = HTTPStatus.TOO_MANY_REQUESTS


class NotFoundError(ImageServiceError):
    """Raised when a requested resource is not found."""

    status_code = HTTPStatus.NOT_FOUND


class ResourceError(ImageServiceError):
    """Raised when the storage directory cannot be read or written."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR

"""Application exceptions and their HTTP rendering.

Every domain failure raised by services is an ``AppException`` subclass
carrying its HTTP status and a stable error code. The handlers registered
by ``setup_exception_handlers`` render all errors as ``ErrorResponse``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import Request

logger = get_logger(__name__)


class ErrorDetail(BaseModel):
    """Structured error detail for validation errors."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Structured error response."""

    error: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class
    for consistent error handling.
    """

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: list[ErrorDetail] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidInputError(AppException):
    """Request data failed validation."""

    def __init__(
        self,
        message: str,
        details: list[ErrorDetail] | None = None,
    ) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error="INVALID_INPUT",
            message=message,
            details=details,
        )


class ConflictError(AppException):
    """The resource already exists.

    Rendered as 400 rather than 409 to match what existing clients expect
    for duplicate registrations and bookmarks.
    """

    def __init__(self, message: str) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error="CONFLICT",
            message=message,
        )


class NotFoundError(AppException):
    """Resource not found."""

    def __init__(self, message: str) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error="NOT_FOUND",
            message=message,
        )


class UnauthorizedError(AppException):
    """Missing or unrecognized credentials."""

    def __init__(self, message: str = "Could not validate credentials") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error="UNAUTHORIZED",
            message=message,
        )


class ForbiddenError(AppException):
    """Authenticated, but not allowed to perform the action."""

    def __init__(self, message: str = "Insufficient permissions") -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            error="FORBIDDEN",
            message=message,
        )


class StoreError(AppException):
    """The database could not complete an operation."""

    def __init__(self, message: str = "Database operation failed") -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error="INTERNAL_SERVER_ERROR",
            message=message,
        )


class StorageError(AppException):
    """The object store rejected or failed an upload."""

    def __init__(self, message: str = "Image upload failed") -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error="INTERNAL_SERVER_ERROR",
            message=message,
        )


class ServiceUnavailableError(AppException):
    """A required service was not initialized."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error="SERVICE_UNAVAILABLE",
            message=message,
        )


_INTERNAL_ERRORS = (StoreError, StorageError)
_GENERIC_INTERNAL_MESSAGE = "An unexpected error occurred"


def _get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _render(request: Request, status_code: int, body: ErrorResponse) -> ORJSONResponse:
    body.request_id = _get_request_id(request)
    return ORJSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


def validation_details(errors: list[dict]) -> list[ErrorDetail]:
    """Convert pydantic error dicts into ``ErrorDetail`` entries."""
    return [
        ErrorDetail(
            code="VALIDATION_ERROR",
            message=error["msg"],
            field=".".join(str(loc) for loc in error["loc"] if loc != "body")
            or None,
        )
        for error in errors
    ]


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> ORJSONResponse:
        if isinstance(exc, _INTERNAL_ERRORS):
            logger.opt(exception=exc).error(
                "Internal dependency failure",
                error_type=type(exc).__name__,
                reason=exc.message,
            )
            return _render(
                request,
                exc.status_code,
                ErrorResponse(error=exc.error, message=_GENERIC_INTERNAL_MESSAGE),
            )
        return _render(
            request,
            exc.status_code,
            ErrorResponse(error=exc.error, message=exc.message, details=exc.details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        return _render(
            request,
            exc.status_code,
            ErrorResponse(error="HTTP_ERROR", message=str(exc.detail)),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        # Malformed input is a 400 across the API, not FastAPI's default 422
        return _render(
            request,
            status.HTTP_400_BAD_REQUEST,
            ErrorResponse(
                error="INVALID_INPUT",
                message="Request validation failed",
                details=validation_details(list(exc.errors())),
            ),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        logger.opt(exception=exc).error("Unhandled exception")
        return _render(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(
                error="INTERNAL_SERVER_ERROR",
                message=_GENERIC_INTERNAL_MESSAGE,
            ),
        )

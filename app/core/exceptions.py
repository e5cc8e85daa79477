"""
Global exception handling for the application.
Every error leaves the API as ``{"success": false, "error": ...}`` where
``error`` is a message or a list of messages.
"""

from typing import Any, Dict, List, Optional, Union

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)

ErrorPayload = Union[str, List[str]]


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: ErrorPayload,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(str(self.message))


class ValidationException(AppError):
    """Malformed or missing input; carries one message per offending field."""
    def __init__(self, messages: Union[str, List[str]], details: Optional[Dict[str, Any]] = None):
        if isinstance(messages, str):
            messages = [messages]
        super().__init__(list(messages), status.HTTP_400_BAD_REQUEST, details)


class DuplicateFieldException(AppError):
    """Unique constraint violation."""
    def __init__(self, field: str):
        self.field = field
        super().__init__(
            f"A user with this {field} already exists.",
            status.HTTP_400_BAD_REQUEST,
            {"field": field},
        )


class BadRequestException(AppError):
    def __init__(self, message: str = "Bad request", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class InvalidCredentialsException(AppError):
    """Login failure. The message never says which part was wrong."""
    def __init__(self):
        super().__init__("Invalid credentials", status.HTTP_401_UNAUTHORIZED)


class UnauthorizedException(AppError):
    """Authentication failure error."""
    def __init__(self, message: str = "Not authorized to access this route", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class ForbiddenException(AppError):
    """Authorization failure error."""
    def __init__(self, message: str = "Forbidden", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Entity not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class PayloadTooLargeException(AppError):
    def __init__(self, max_bytes: int):
        super().__init__(
            f"File exceeds the maximum upload size of {max_bytes} bytes",
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            {"max_bytes": max_bytes},
        )


class UploadFailedException(AppError):
    """Object storage rejected or failed the upload."""
    def __init__(self, message: str = "Image upload failed", status_code: Optional[int] = None):
        super().__init__(message, status_code or status.HTTP_500_INTERNAL_SERVER_ERROR)


class GeocodingFailedException(AppError):
    def __init__(self, message: str = "Geocoding provider unavailable"):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY)


def error_response(status_code: int, error: ErrorPayload, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error},
        headers=headers,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Request failed with application error",
            error_code=exc.__class__.__name__,
            error=str(exc.message),
            path=request.url.path,
        )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedException) else None
    return error_response(exc.status_code, exc.message, headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Turn FastAPI's 422 body/query errors into 400 with one message per field."""
    messages = []
    for err in exc.errors():
        location = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location)
        messages.append(f"{field}: {err.get('msg')}" if field else err.get("msg"))
    return error_response(status.HTTP_400_BAD_REQUEST, messages)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""
    logger.exception("Unexpected error occurred", path=request.url.path)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Server Error",
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

"""
Global exception handlers for the FastAPI application.
Every error leaves the API as an error document:

    {"errors": [{"status": "404", "code": "not_found", "title": "...", "detail": "..."}]}

Field-level validation failures carry one error per field with a
``source.pointer`` into the request document.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from slowapi.errors import RateLimitExceeded
import logging
from typing import Any, Dict, List, Optional


logger = logging.getLogger(__name__)


ERROR_CODES = {
    400: ("bad_request", "Bad Request"),
    401: ("unauthorized", "Unauthorized"),
    403: ("forbidden", "Forbidden"),
    404: ("not_found", "Not Found"),
    405: ("method_not_allowed", "Method Not Allowed"),
    422: ("unprocessable_entity", "Unprocessable Entity"),
    429: ("too_many_requests", "Too Many Requests"),
    500: ("internal_server_error", "Internal Server Error"),
}


class AppException(Exception):
    """Base application exception."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class UnauthorizedError(AppException):
    """Missing or invalid credentials."""
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AppException):
    """Authenticated, but not allowed to touch the resource."""
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppException):
    """No such record."""
    status_code = status.HTTP_404_NOT_FOUND


class UnprocessableEntityError(AppException):
    """
    Request document or attributes failed validation.

    ``details`` maps attribute names to messages, e.g. ``{"name": "can't be blank"}``.
    Each key is appended to ``pointer_prefix`` to locate the error in the
    request document; an empty key carries no pointer.
    """
    status_code = 422

    def __init__(
        self,
        message: str = "Unprocessable entity",
        details: Optional[Dict[str, str]] = None,
        pointer_prefix: str = "/data/attributes/",
    ):
        super().__init__(message, details=details or {})
        self.pointer_prefix = pointer_prefix


def error_object(
    status_code: int,
    detail: Optional[str] = None,
    pointer: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a single entry of an error document."""
    code, title = ERROR_CODES.get(status_code, ("error", "Error"))
    error: Dict[str, Any] = {
        "status": str(status_code),
        "code": code,
        "title": title,
    }
    if detail is not None:
        error["detail"] = detail
    if pointer is not None:
        error["source"] = {"pointer": pointer}
    return error


def error_response(status_code: int, errors: List[Dict[str, Any]], headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"errors": errors}, headers=headers)


def _attribute_errors(exc: AppException) -> List[Dict[str, Any]]:
    if isinstance(exc, UnprocessableEntityError) and exc.details:
        return [
            error_object(exc.status_code, message, pointer=f"{exc.pointer_prefix}{field}" if field else None)
            for field, message in exc.details.items()
        ]
    return [error_object(exc.status_code, exc.message)]


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions."""
    logger.warning(
        f"Application exception: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return error_response(exc.status_code, _attribute_errors(exc), headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )

    return error_response(
        exc.status_code,
        [error_object(exc.status_code, str(exc.detail))],
        headers=getattr(exc, "headers", None),
    )


def _pointer(loc: tuple) -> str:
    # ("body", "data", "attributes", "name") -> /data/attributes/name
    parts = [str(part) for part in loc if part != "body"]
    return "/" + "/".join(parts)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    errors = [
        error_object(422, error.get("msg"), pointer=_pointer(tuple(error.get("loc", ()))))
        for error in exc.errors()
    ]

    logger.warning(
        "Validation error",
        extra={
            "path": request.url.path,
            "errors": errors,
        },
    )

    return error_response(422, errors)


async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle requests over the configured rate limit."""
    logger.warning(
        f"Rate limit exceeded: {exc.detail}",
        extra={
            "path": request.url.path,
        },
    )

    response = error_response(
        status.HTTP_429_TOO_MANY_REQUESTS,
        [error_object(status.HTTP_429_TOO_MANY_REQUESTS, f"Rate limit exceeded: {exc.detail}")],
    )
    # Retry-After / X-RateLimit-* headers, when the limiter has them enabled
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    if view_rate_limit is not None:
        response = request.app.state.limiter._inject_headers(response, view_rate_limit)
    return response


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
    )

    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        [error_object(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")],
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

# configapi/middleware/error_handler.py
# Structured error handling: application error kinds, the JSON error envelope,
# and the middleware / exception handlers that render them.

import traceback
import logging
from typing import Callable
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from configapi.observability.logger import log_exception

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error with structured response."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: dict = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}


class ValidationError(AppError):
    """Malformed or missing required input."""
    def __init__(self, message: str = "Validation failed", details: dict = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=400,
            details=details
        )


class NotFoundError(AppError):
    """Referenced entity does not exist."""
    def __init__(self, message: str = "Resource not found", details: dict = None):
        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=404,
            details=details
        )


class ConflictError(AppError):
    """Write would break a store invariant (home page, route, home deletion)."""
    def __init__(self, message: str = "Conflict", details: dict = None):
        super().__init__(
            message=message,
            error_code="CONFLICT",
            status_code=409,
            details=details
        )


class InternalError(AppError):
    """Store unreachable or failed unexpectedly."""
    def __init__(self, message: str = "Database error", details: dict = None):
        super().__init__(
            message=message,
            error_code="DB_ERROR",
            status_code=500,
            details=details
        )


def create_error_response(
    error_code: str,
    message: str,
    status_code: int,
    details: dict = None,
    request_id: str = None
) -> JSONResponse:
    """Create a standardized JSON error response."""
    content = {
        "error": {
            "code": error_code,
            "message": message,
        }
    }

    if details:
        content["error"]["details"] = details

    if request_id:
        content["error"]["request_id"] = request_id

    return JSONResponse(status_code=status_code, content=content)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware that catches all unhandled exceptions and returns
    consistent JSON error responses.
    """

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = request.headers.get("X-Request-ID")

        # AppError never gets here: the handler from setup_exception_handlers renders it
        try:
            return await call_next(request)

        except Exception as e:
            error_details = None
            if self.debug:
                error_details = {
                    "type": type(e).__name__,
                    "traceback": traceback.format_exc()
                }

            log_exception(e, context=f"Unhandled error on {request.method} {request.url.path}")
            return create_error_response(
                error_code="INTERNAL_ERROR",
                message="An internal error occurred. Please try again later.",
                status_code=500,
                details=error_details,
                request_id=request_id
            )


def _field_paths(exc: RequestValidationError) -> list[str]:
    # ("body", "position") -> "position"; keep the location only when it is not the body
    paths = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] == "body":
            loc = loc[1:]
        paths.append(".".join(loc) or "body")
    return paths


def setup_exception_handlers(app):
    """Register exception handlers on FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(
                f"AppError: {exc.error_code} - {exc.message}",
                extra={"path": request.url.path},
                exc_info=exc,
            )
        return create_error_response(
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            details=exc.details,
            request_id=request.headers.get("X-Request-ID"),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Unparseable JSON and wrong field types are client errors (400), not 422
        return create_error_response(
            error_code="VALIDATION_ERROR",
            message="Invalid request body",
            status_code=400,
            details={"fields": _field_paths(exc)},
            request_id=request.headers.get("X-Request-ID"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return create_error_response(
                error_code="NOT_FOUND",
                message="Resource not found",
                status_code=404
            )
        if exc.status_code == 405:
            return create_error_response(
                error_code="METHOD_NOT_ALLOWED",
                message="Method not allowed",
                status_code=405
            )
        return create_error_response(
            error_code="HTTP_ERROR",
            message=str(exc.detail),
            status_code=exc.status_code
        )

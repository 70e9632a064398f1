"""
Global Error Handler Middleware

This module provides centralized exception handling for the FastAPI application,
ensuring consistent error responses and proper logging for all exceptions.

Response bodies:
- client errors carry a single ``message`` field
- payload validation errors carry an ``errors`` array of strings
- unexpected errors are reported as a generic 500 without internals
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from taskapi.config import settings
from taskapi.exceptions import AppException, ErrorCode


logger = structlog.get_logger(__name__)

# Map HTTP status codes to error codes for logging
ERROR_CODE_MAP = {
    400: ErrorCode.REQUEST_BAD.value,
    401: ErrorCode.AUTH_INVALID_CREDENTIAL.value,
    404: ErrorCode.RESOURCE_NOT_FOUND.value,
    405: ErrorCode.REQUEST_METHOD_NOT_ALLOWED.value,
    409: ErrorCode.RESOURCE_CONFLICT.value,
    422: ErrorCode.VALIDATION_FAILED.value,
    500: ErrorCode.INTERNAL_ERROR.value,
}


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Handle custom application exceptions

    Converts AppException instances to JSON responses with the exception's
    own status code, body and headers.

    Args:
        request: The incoming request
        exc: The AppException instance

    Returns:
        JSONResponse with error details
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Application exception",
        path=request.url.path,
        method=request.method,
        status_code=exc.status_code,
        error_code=exc.error_code.value,
        message=exc.message,
        details=exc.details,
        exc_info=exc.status_code >= 500  # Only include stack trace for server errors
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers or None
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Handle standard HTTP exceptions

    Covers framework-raised errors such as unknown routes (404) and keeps any
    headers the exception carries.

    Args:
        request: The incoming request
        exc: The HTTPException instance

    Returns:
        JSONResponse with a ``message`` field
    """
    error_code = ERROR_CODE_MAP.get(exc.status_code, ErrorCode.UNKNOWN_ERROR.value)

    logger.warning(
        "HTTP exception",
        path=request.url.path,
        method=request.method,
        status_code=exc.status_code,
        error_code=error_code,
        detail=exc.detail
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request validation errors

    Converts Pydantic validation errors into the ``errors`` array format
    used for payload validation, one string per problem.

    Args:
        request: The incoming request
        exc: The RequestValidationError instance

    Returns:
        JSONResponse with validation error messages
    """
    errors = []
    for error in exc.errors():
        # Drop the leading "body"/"path"/"query" location segment
        location = [str(loc) for loc in error["loc"][1:]] or [str(loc) for loc in error["loc"]]
        errors.append(f"{'.'.join(location)}: {error['msg']}")

    logger.warning(
        "Validation error",
        path=request.url.path,
        method=request.method,
        error_count=len(errors),
        errors=errors
    )

    return JSONResponse(
        status_code=422,
        content={"errors": errors}
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all unhandled exceptions

    Catches any exceptions not handled by other handlers and returns
    a generic error response. Internal details are only shown in DEBUG.

    Args:
        request: The incoming request
        exc: The unhandled exception

    Returns:
        JSONResponse with generic error message
    """
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        error=str(exc),
        exc_info=True
    )

    content = {"message": "Internal server error"}
    if settings.DEBUG:
        content["type"] = type(exc).__name__
        content["detail"] = str(exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content
    )


def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI app

    Args:
        app: FastAPI application instance

    Example:
        from taskapi.middleware.error_handler import register_exception_handlers
        register_exception_handlers(app)
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Exception handlers registered")

"""
Centralized exception handlers for the UPI Extractor FastAPI application.

Every error leaves the API in the same envelope:

    {"success": false, "error": {"code", "message", "timestamp", "details"?, "request_id"?}}
"""
import logging
import traceback
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from sqlalchemy.exc import SQLAlchemyError, IntegrityError

from upi_extractor.utils.exceptions import UPIExtractorException

logger = logging.getLogger(__name__)

HTTP_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "AUTHENTICATION_ERROR",
    status.HTTP_403_FORBIDDEN: "AUTHORIZATION_ERROR",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_413_REQUEST_ENTITY_TOO_LARGE: "PAYLOAD_TOO_LARGE",
    status.HTTP_422_UNPROCESSABLE_ENTITY: "VALIDATION_ERROR",
}


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def _log_context(request: Request, **extra) -> Dict[str, Any]:
    return {
        "request_id": _request_id(request),
        "path": str(request.url),
        "method": request.method,
        **extra,
    }


def create_error_response(
    error_code: str,
    message: str,
    details: Dict[str, Any] = None,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    request_id: str = None,
    headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    """Create a standardized error response."""
    error = {
        "code": error_code,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if details:
        error["details"] = details
    if request_id:
        error["request_id"] = request_id

    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error},
        headers=headers
    )


async def app_exception_handler(request: Request, exc: UPIExtractorException) -> JSONResponse:
    """Handle exceptions raised deliberately by the application."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{exc.error_code}: {exc.message}",
        extra=_log_context(request, error_code=exc.error_code, details=exc.details)
    )

    return create_error_response(
        error_code=exc.error_code,
        message=exc.message,
        details=exc.details,
        status_code=exc.status_code,
        request_id=_request_id(request),
        headers=exc.headers
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle framework HTTP errors such as unknown routes."""
    logger.warning(
        f"HTTP {exc.status_code}: {exc.detail}",
        extra=_log_context(request, status_code=exc.status_code)
    )

    return create_error_response(
        error_code=HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
        message=str(exc.detail),
        status_code=exc.status_code,
        request_id=_request_id(request),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle malformed query strings and request bodies."""
    validation_errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    logger.warning(
        f"Validation failed with {len(validation_errors)} error(s)",
        extra=_log_context(request, validation_errors=validation_errors)
    )

    return create_error_response(
        error_code="VALIDATION_ERROR",
        message="Input validation failed",
        details={"validation_errors": validation_errors},
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        request_id=_request_id(request)
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle database errors that escaped the service layer."""
    logger.error(
        f"Database error: {type(exc).__name__} - {exc}",
        extra=_log_context(request, traceback=traceback.format_exc())
    )

    if isinstance(exc, IntegrityError):
        return create_error_response(
            error_code="CONFLICT_ERROR",
            message="Data integrity constraint violation",
            status_code=status.HTTP_409_CONFLICT,
            request_id=_request_id(request)
        )

    return create_error_response(
        error_code="DATABASE_ERROR",
        message="Database operation failed",
        request_id=_request_id(request)
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log everything, reveal nothing."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__} - {exc}",
        extra=_log_context(request, traceback=traceback.format_exc())
    )

    return create_error_response(
        error_code="INTERNAL_ERROR",
        message="An unexpected error occurred",
        request_id=_request_id(request)
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(UPIExtractorException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

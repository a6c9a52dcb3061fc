"""
Custom exception classes for the UPI Extractor application.
"""
from typing import Any, Dict, Optional
from fastapi import status


class UPIExtractorException(Exception):
    """Base exception class for UPI Extractor application."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        headers: Optional[Dict[str, str]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        self.headers = headers
        super().__init__(self.message)


class ValidationError(UPIExtractorException):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details={"field": field, **(details or {})},
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
        )


class AuthenticationError(UPIExtractorException):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="AUTHENTICATION_ERROR",
            details=details,
            status_code=status.HTTP_401_UNAUTHORIZED
        )


class AuthorizationError(UPIExtractorException):
    """Raised when user doesn't have permission."""

    def __init__(self, message: str = "Access denied", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="AUTHORIZATION_ERROR",
            details=details,
            status_code=status.HTTP_403_FORBIDDEN
        )


class ConflictError(UPIExtractorException):
    """Raised when there's a conflict with existing data."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="CONFLICT_ERROR",
            details=details,
            status_code=status.HTTP_409_CONFLICT
        )


class BusinessLogicError(UPIExtractorException):
    """Raised when business logic rules are violated."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="BUSINESS_LOGIC_ERROR",
            details=details,
            status_code=status.HTTP_400_BAD_REQUEST
        )


class PayloadTooLargeError(UPIExtractorException):
    """Raised when an upload exceeds the size limit."""

    def __init__(self, max_bytes: int, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"File too large: limit is {max_bytes} bytes",
            error_code="PAYLOAD_TOO_LARGE",
            details={"max_bytes": max_bytes, **(details or {})},
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        )


class ExternalServiceError(UPIExtractorException):
    """Raised when external service calls fail."""

    def __init__(self, service: str, message: str = None, details: Optional[Dict[str, Any]] = None):
        message = message or f"External service {service} is unavailable"
        super().__init__(
            message=message,
            error_code="EXTERNAL_SERVICE_ERROR",
            details={"service": service, **(details or {})},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


class ExtractionError(UPIExtractorException):
    """Raised when the model output cannot be turned into a transaction."""

    def __init__(self, message: str = "An error occurred while processing the image.", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="EXTRACTION_ERROR",
            details=details,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


class DatabaseError(UPIExtractorException):
    """Raised when database operations fail."""

    def __init__(self, message: str = "Database operation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="DATABASE_ERROR",
            details=details,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


class RateLimitError(UPIExtractorException):
    """Raised when rate limits are exceeded."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ):
        super().__init__(
            message=message,
            error_code="RATE_LIMIT_ERROR",
            details=details,
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            headers=headers
        )

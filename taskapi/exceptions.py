"""
Custom Exception Classes

This module defines the exceptions that the Task API turns into HTTP
responses. Each exception carries its status code, a standardized error code
for logging and client-side handling, and renders its own response body:
authentication and lookup failures as ``{"message": ...}``, validation
failures as ``{"errors": [...]}``.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """
    Standardized error codes.

    Format: CATEGORY_SPECIFIC_ERROR
    Categories: AUTH, RESOURCE, VALIDATION, REQUEST, INTERNAL
    """
    # Authentication errors
    AUTH_MISSING_CREDENTIAL = "AUTH_001"
    AUTH_MALFORMED_CREDENTIAL = "AUTH_002"
    AUTH_INVALID_CREDENTIAL = "AUTH_003"

    # Resource errors
    RESOURCE_NOT_FOUND = "RESOURCE_001"
    RESOURCE_CONFLICT = "RESOURCE_002"

    # Validation errors
    VALIDATION_FAILED = "VALIDATION_001"

    # Request errors
    REQUEST_BAD = "REQUEST_001"
    REQUEST_METHOD_NOT_ALLOWED = "REQUEST_002"

    # Internal errors
    INTERNAL_ERROR = "INTERNAL_001"
    UNKNOWN_ERROR = "INTERNAL_999"


class AppException(Exception):
    """
    Base application exception

    All custom exceptions should inherit from this class to ensure
    consistent error handling across the application.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default: 500)
        error_code: Standardized error code
        details: Additional error details, logged but not sent to clients
        headers: Extra response headers (e.g. Allow)
    """
    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        self.headers = headers or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response"""
        return {"message": self.message}


class BadRequestError(AppException):
    """
    Malformed request error

    Raised when the request itself cannot be understood (e.g. a body that is
    not valid JSON). Returns HTTP 400.
    """
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message,
            status_code=400,
            error_code=ErrorCode.REQUEST_BAD,
            details=details
        )


class MissingCredentialError(AppException):
    """
    Missing credential error

    Raised when the request carries no credential at all (empty or absent
    API key header). Returns HTTP 400.

    Example:
        raise MissingCredentialError("Missing API key")
    """
    def __init__(self, message: str = "Missing credentials"):
        super().__init__(
            message,
            status_code=400,
            error_code=ErrorCode.AUTH_MISSING_CREDENTIAL,
        )


class MalformedCredentialError(AppException):
    """
    Malformed credential error

    Raised when a credential is present but cannot be parsed (wrong
    Authorization scheme, token that is not three base64url segments,
    payload without a subject). Returns HTTP 400.
    """
    def __init__(self, message: str = "Malformed credentials"):
        super().__init__(
            message,
            status_code=400,
            error_code=ErrorCode.AUTH_MALFORMED_CREDENTIAL,
        )


class InvalidCredentialError(AppException):
    """
    Invalid credential error

    Raised when a well-formed credential is rejected (unknown API key, bad
    token signature, expired token, wrong password). Returns HTTP 401.

    Example:
        raise InvalidCredentialError("Invalid API key")
    """
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(
            message,
            status_code=401,
            error_code=ErrorCode.AUTH_INVALID_CREDENTIAL,
        )


class NotFoundError(AppException):
    """
    Resource not found error

    Raised when a requested resource is absent or is owned by another user;
    both cases produce the same response. Returns HTTP 404.

    Example:
        raise NotFoundError("Task", "42")
    """
    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"{resource} with ID {identifier} not found",
            status_code=404,
            error_code=ErrorCode.RESOURCE_NOT_FOUND,
            details={"resource": resource, "identifier": identifier}
        )


class MethodNotAllowedError(AppException):
    """
    Method not allowed error

    Raised when the path matches a resource but not the HTTP method.
    Returns HTTP 405 with an ``Allow`` header listing the supported methods.

    Example:
        raise MethodNotAllowedError(["GET", "POST"])
    """
    def __init__(self, allowed_methods: List[str]):
        self.allowed_methods = list(allowed_methods)
        super().__init__(
            "Method not allowed",
            status_code=405,
            error_code=ErrorCode.REQUEST_METHOD_NOT_ALLOWED,
            details={"allowed_methods": self.allowed_methods},
            headers={"Allow": ", ".join(self.allowed_methods)},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {}


class ConflictError(AppException):
    """
    Resource conflict error

    Raised when an operation conflicts with existing data
    (e.g., registering a username that is already taken).
    Returns HTTP 409.
    """
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message,
            status_code=409,
            error_code=ErrorCode.RESOURCE_CONFLICT,
            details=details
        )


class UnprocessableEntityError(AppException):
    """
    Payload validation error

    Raised with every problem found in a create/update payload rather than
    only the first one. Returns HTTP 422 with an ``errors`` array.

    Example:
        raise UnprocessableEntityError(["Name is required"])
    """
    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(
            "Validation failed",
            status_code=422,
            error_code=ErrorCode.VALIDATION_FAILED,
            details={"errors": self.errors}
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"errors": self.errors}

"""Middleware package for request/response processing"""

from taskapi.middleware.error_handler import register_exception_handlers
from taskapi.middleware.request_context import RequestContextMiddleware

__all__ = [
    "register_exception_handlers",
    "RequestContextMiddleware",
]

"""API middleware."""

from billing.api.middleware.error_handler import ErrorHandlerMiddleware
from billing.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]

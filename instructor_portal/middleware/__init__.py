"""ASGI middleware for the portal API."""

from .error_handler import ErrorHandlerMiddleware
from .request_context import RequestContextMiddleware

__all__ = ["ErrorHandlerMiddleware", "RequestContextMiddleware"]

"""Instructor portal API handlers and JSON:API response formatting."""

from .core.document import ResponseDocumentBuilder
from .core.errors import JSONAPIErrorBuilder
from .core.exceptions import DocumentError

__all__ = ["DocumentError", "JSONAPIErrorBuilder", "ResponseDocumentBuilder"]

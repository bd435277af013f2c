"""Core JSON:API document and error helpers."""

from .document import Collection, ResponseDocument, ResponseDocumentBuilder, Single
from .errors import JSONAPIErrorBuilder
from .exceptions import (
    CyclicRelationshipError,
    DocumentError,
    InvalidTypeError,
    MissingIdError,
    MissingRelationshipTypeError,
    MissingRelationshipTypeInArrayError,
)

__all__ = [
    "Collection",
    "CyclicRelationshipError",
    "DocumentError",
    "InvalidTypeError",
    "JSONAPIErrorBuilder",
    "MissingIdError",
    "MissingRelationshipTypeError",
    "MissingRelationshipTypeInArrayError",
    "ResponseDocument",
    "ResponseDocumentBuilder",
    "Single",
]

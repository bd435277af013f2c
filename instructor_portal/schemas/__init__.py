"""Pydantic schemas for JSON:API documents and authorizer policies."""

from .policy import AuthorizerResponse, PolicyDocument, PolicyStatement
from .resource import (
    JSONAPIDocument,
    JSONAPIErrorDocument,
    JSONAPIErrorObject,
    JSONAPIResourceObject,
)

__all__ = [
    "AuthorizerResponse",
    "JSONAPIDocument",
    "JSONAPIErrorDocument",
    "JSONAPIErrorObject",
    "JSONAPIResourceObject",
    "PolicyDocument",
    "PolicyStatement",
]

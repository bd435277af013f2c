"""Utility helpers for ARNs and payload validation."""

from .arn import api_stage, extract_arn_path
from .brand import resolve_brand
from .schema_validation import PropertyConfig, SchemaConfig, validate_json_schema

__all__ = [
    "PropertyConfig",
    "SchemaConfig",
    "api_stage",
    "extract_arn_path",
    "resolve_brand",
    "validate_json_schema",
]

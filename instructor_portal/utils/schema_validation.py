"""Minimal property-schema validation for request payloads."""

from __future__ import annotations

from typing import Any, Literal, Mapping, TypedDict

PropertyType = Literal["string", "number", "boolean", "object", "array"]


class PropertyConfig(TypedDict, total=False):
    type: PropertyType
    enumValues: list[Any]
    isOptional: bool


SchemaConfig = Mapping[str, PropertyConfig]


def _matches_type(value: Any, property_type: str) -> bool:
    if property_type == "string":
        return isinstance(value, str)
    if property_type == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if property_type == "boolean":
        return isinstance(value, bool)
    if property_type == "object":
        return isinstance(value, Mapping)
    if property_type == "array":
        return isinstance(value, (list, tuple))
    return True


def _matches_enum(value: Any, enum_values: list[Any]) -> bool:
    if isinstance(value, (list, tuple)):
        return all(item in enum_values for item in value)
    return value in enum_values


def validate_json_schema(obj: Mapping[str, Any], schema: SchemaConfig) -> bool:
    """Return True when ``obj`` satisfies every property of ``schema``.

    Missing keys are allowed only for optional properties. For arrays,
    ``enumValues`` constrains every element.
    """
    for key, config in schema.items():
        if key not in obj or obj[key] is None:
            if config.get("isOptional"):
                continue
            return False
        value = obj[key]
        if not _matches_type(value, config["type"]):
            return False
        enum_values = config.get("enumValues")
        if enum_values and not _matches_enum(value, enum_values):
            return False
    return True

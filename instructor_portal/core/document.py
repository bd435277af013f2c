"""JSON:API document construction from raw data-store records.

Raw records are plain mappings carrying an ``id`` and, optionally, a
reserved ``relationships`` key. Relationships are expanded inline: each
related object declares its own ``type`` and is transformed recursively
with the same rules as the top-level record.

See https://jsonapi.org/format/#fetching-resources-responses
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Union

from .exceptions import (
    CyclicRelationshipError,
    InvalidTypeError,
    MissingIdError,
    MissingRelationshipTypeError,
    MissingRelationshipTypeInArrayError,
)

RawObject = Mapping[str, Any]
RawInput = Union[RawObject, Sequence[RawObject]]

RELATIONSHIPS_KEY = "relationships"


@dataclass(frozen=True)
class ResourceObject:
    """A transformed resource: ``type``, ``id``, attributes and relationships."""

    type: str
    id: Any
    attributes: dict[str, Any]
    relationships: dict[str, ResponseDocument] | None = None

    def to_dict(self) -> dict[str, Any]:
        resource: dict[str, Any] = {
            "type": self.type,
            "id": self.id,
            "attributes": dict(self.attributes),
        }
        if self.relationships is not None:
            resource["relationships"] = {
                name: document.to_dict()
                for name, document in self.relationships.items()
            }
        return resource


@dataclass(frozen=True)
class Single:
    """Primary data holding exactly one resource object."""

    resource: ResourceObject

    def promote(self) -> Collection:
        """Return a one-element collection holding this resource."""
        return Collection((self.resource,))

    def to_data(self) -> dict[str, Any]:
        return self.resource.to_dict()


@dataclass(frozen=True)
class Collection:
    """Primary data holding an ordered sequence of resource objects."""

    resources: tuple[ResourceObject, ...] = ()

    def append(self, resource: ResourceObject) -> Collection:
        return Collection(self.resources + (resource,))

    def __len__(self) -> int:
        return len(self.resources)

    def to_data(self) -> list[dict[str, Any]]:
        return [resource.to_dict() for resource in self.resources]


Data = Union[Single, Collection]


@dataclass(frozen=True)
class ResponseDocument:
    """Top-level (or nested relationship) JSON:API document."""

    data: Data
    meta: dict[str, Any] | None = field(default=None)

    def merge(self, resource: ResourceObject) -> ResponseDocument:
        """Add ``resource`` to this document's data.

        Single data is promoted to a collection the first time another
        resource of the same type is merged in; ``meta.count`` tracks the
        collection length afterwards.
        """
        collection = self.data.promote() if isinstance(self.data, Single) else self.data
        collection = collection.append(resource)
        return ResponseDocument(collection, {"count": len(collection)})

    def to_dict(self) -> dict[str, Any]:
        document: dict[str, Any] = {"data": self.data.to_data()}
        if self.meta is not None:
            document["meta"] = dict(self.meta)
        return document


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _has_key(obj: Any, key: str) -> bool:
    return isinstance(obj, Mapping) and key in obj


def _validate_type(type_: Any) -> str:
    if not isinstance(type_, str) or type_ == "":
        raise InvalidTypeError()
    return type_


def build_document(
    type_: str,
    input_: RawInput,
    meta: Mapping[str, Any] | None = None,
    *,
    _ancestors: frozenset[int] = frozenset(),
) -> ResponseDocument:
    """Transform a raw object, or a sequence of them, into a document."""
    _validate_type(type_)
    if _is_sequence(input_):
        resources = tuple(
            transform_object(type_, obj, _ancestors=_ancestors) for obj in input_
        )
        return ResponseDocument(
            Collection(resources), {**(meta or {}), "count": len(resources)}
        )
    resource = transform_object(type_, input_, _ancestors=_ancestors)
    return ResponseDocument(Single(resource), dict(meta) if meta is not None else None)


def transform_object(
    type_: str, obj: RawObject, *, _ancestors: frozenset[int] = frozenset()
) -> ResourceObject:
    """Split a raw object into id, attributes and expanded relationships."""
    if not _has_key(obj, "id") or obj["id"] is None or obj["id"] == "":
        raise MissingIdError()
    attributes = {key: value for key, value in obj.items() if key != "id"}
    if RELATIONSHIPS_KEY not in attributes:
        return ResourceObject(type_, obj["id"], attributes)

    raw_relationships = attributes.pop(RELATIONSHIPS_KEY)
    if raw_relationships is None:
        return ResourceObject(type_, obj["id"], attributes)
    relationships = handle_relationships(
        raw_relationships, _ancestors=_ancestors | {id(obj)}
    )
    return ResourceObject(type_, obj["id"], attributes, relationships)


def handle_relationships(
    relationship: RawObject | Sequence[RawObject],
    *,
    _ancestors: frozenset[int] = frozenset(),
) -> dict[str, ResponseDocument]:
    """Dispatch on a single relationship object or a sequence of them."""
    if _is_sequence(relationship):
        return group_relationships(relationship, _ancestors=_ancestors)
    return process_relationship(relationship, _ancestors=_ancestors)


def process_relationship(
    relationship: RawObject, *, _ancestors: frozenset[int] = frozenset()
) -> dict[str, ResponseDocument]:
    """Expand one relationship object under its own ``type`` key."""
    if not _has_key(relationship, "type"):
        raise MissingRelationshipTypeError()
    relation_type = relationship["type"]
    resource = _relationship_resource(relationship, _ancestors)
    return {relation_type: ResponseDocument(Single(resource))}


def group_relationships(
    relationships: Sequence[RawObject], *, _ancestors: frozenset[int] = frozenset()
) -> dict[str, ResponseDocument]:
    """Group a sequence of relationship objects by their declared ``type``.

    A type seen once keeps single-object ``data``; a second occurrence turns
    ``data`` into a list and adds ``meta.count``. Insertion order follows the
    first occurrence of each type.
    """
    grouped: dict[str, ResponseDocument] = {}
    for relationship in relationships:
        if not _has_key(relationship, "type"):
            raise MissingRelationshipTypeInArrayError()
        relation_type = relationship["type"]
        resource = _relationship_resource(relationship, _ancestors)
        existing = grouped.get(relation_type)
        if existing is None:
            grouped[relation_type] = ResponseDocument(Single(resource))
        else:
            grouped[relation_type] = existing.merge(resource)
    return grouped


def _relationship_resource(
    relationship: RawObject, ancestors: frozenset[int]
) -> ResourceObject:
    if id(relationship) in ancestors:
        raise CyclicRelationshipError()
    remaining = {key: value for key, value in relationship.items() if key != "type"}
    return transform_object(
        _validate_type(relationship["type"]),
        remaining,
        _ancestors=ancestors | {id(relationship)},
    )


class ResponseDocumentBuilder:
    """Transform raw objects into JSON:API compliant response bodies.

    The input is transformed eagerly in the constructor; invalid input
    raises a :class:`~instructor_portal.core.exceptions.DocumentError`
    before any document is returned.

    >>> ResponseDocumentBuilder("user", {"id": "1", "name": "Jane"}).format_as_response()
    {'data': {'type': 'user', 'id': '1', 'attributes': {'name': 'Jane'}}}
    """

    def __init__(
        self,
        type_: str,
        input_: RawInput,
        meta: Mapping[str, Any] | None = None,
    ) -> None:
        self._document = build_document(type_, input_, meta)
        self.type = type_

    @property
    def document(self) -> ResponseDocument:
        return self._document

    def format_as_response(self) -> dict[str, Any]:
        """Return the JSON:API response body as plain, JSON-serializable data."""
        return self._document.to_dict()

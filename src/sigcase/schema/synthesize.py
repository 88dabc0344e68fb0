"""Schema synthesis: record type -> SchemaNode, and decoding of authored schemas.

Uses the same kind rules as the introspector with one deliberate difference:
record properties are *required unless tagged optional*, whereas descriptors
are optional unless tagged required. Consumers rely on both defaults.

Example:
    >>> @dataclass
    ... class Answer:
    ...     text: str
    ...     notes: Annotated[str, Tag(",optional")] = ""
    >>> build_schema(Answer).to_document()
    {'properties': {'text': {'type': 'STRING'}, 'notes': {'type': 'STRING'}}, 'required': ['text'], 'type': 'OBJECT'}
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Literal, get_args, get_origin

from pydantic import ValidationError

from sigcase.core.introspect import (
    SEQUENCE_TYPES,
    class_of,
    element_type,
    is_record_type,
    is_union,
    record_fields,
    unwrap_optional,
)
from sigcase.foundation.errors import Err, Ok, Result, SignatureError, schema_decode_failed

from .node import SchemaNode, SchemaType


def build_schema(tp: Any, *, description: str | None = None) -> SchemaNode:
    """Map a type declaration to a SchemaNode.
    
    Args:
        tp: Any annotation; records become OBJECT nodes
        description: Optional description attached to the produced node
    """
    tp = unwrap_optional(tp)
    node = _build(tp)
    return node.model_copy(update={"description": description}) if description else node


def _build(tp: Any) -> SchemaNode:
    if get_origin(tp) is Literal:
        return _literal_schema(get_args(tp))
    if is_union(tp):
        return SchemaNode(type=SchemaType.STRING)
    
    cls = class_of(tp)
    if cls is None:
        return SchemaNode(type=SchemaType.STRING)
    if is_record_type(cls):
        return _record_schema(cls)
    if issubclass(cls, Enum):
        return _enum_schema(cls)
    if issubclass(cls, bool):
        return SchemaNode(type=SchemaType.BOOLEAN)
    if issubclass(cls, int):
        return SchemaNode(type=SchemaType.INTEGER)
    if issubclass(cls, (float, Decimal)):
        return SchemaNode(type=SchemaType.NUMBER)
    if issubclass(cls, datetime):
        return SchemaNode(type=SchemaType.STRING, format="date-time")
    if issubclass(cls, (bytes, bytearray, memoryview)):
        return SchemaNode(type=SchemaType.STRING, format="byte")
    if issubclass(cls, str):
        return SchemaNode(type=SchemaType.STRING)
    if issubclass(cls, Mapping):
        return SchemaNode(type=SchemaType.OBJECT, properties={})
    if issubclass(cls, SEQUENCE_TYPES):
        return SchemaNode(type=SchemaType.ARRAY, items=build_schema(element_type(tp)))
    return SchemaNode(type=SchemaType.STRING)


def _record_schema(cls: type) -> SchemaNode:
    properties: dict[str, SchemaNode] = {}
    required: list[str] = []
    for rf in record_fields(cls):
        name = rf.tag.name or rf.identifier
        properties[name] = build_schema(rf.annotation, description=rf.tag.description)
        if not rf.tag.optional:
            required.append(name)
    return SchemaNode(type=SchemaType.OBJECT, properties=properties, required=required)


def _enum_schema(cls: type[Enum]) -> SchemaNode:
    """String enum of member values, or of member names when values are not strings."""
    values = [member.value for member in cls]
    if not all(isinstance(v, str) for v in values):
        values = [member.name for member in cls]
    return SchemaNode(type=SchemaType.STRING, format="enum", enum=values)


def _literal_schema(values: tuple[Any, ...]) -> SchemaNode:
    if values and all(isinstance(v, str) for v in values):
        return SchemaNode(type=SchemaType.STRING, format="enum", enum=list(values))
    return _build(type(values[0])) if values else SchemaNode(type=SchemaType.STRING)


# ─────────────────────────────────────────────────────────────────────────────
# Decoding
# ─────────────────────────────────────────────────────────────────────────────


def schema_from_json(data: str | bytes) -> Result[SchemaNode, SignatureError]:
    """Deserialize a pre-authored schema document from JSON text."""
    try:
        return Ok(SchemaNode.model_validate_json(data))
    except ValidationError as exc:
        return Err(schema_decode_failed(_first_error(exc), details=str(exc)))


def schema_from_document(document: Mapping[str, Any]) -> Result[SchemaNode, SignatureError]:
    """Deserialize a pre-authored schema document already parsed into a mapping."""
    if not isinstance(document, Mapping):
        return Err(schema_decode_failed(f"expected an object, got {type(document).__name__}"))
    try:
        return Ok(SchemaNode.model_validate(dict(document)))
    except ValidationError as exc:
        return Err(schema_decode_failed(_first_error(exc), details=str(exc)))


def _first_error(exc: ValidationError) -> str:
    if not (errors := exc.errors()):
        return str(exc)
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    return f"{loc}: {first['msg']}" if loc else first["msg"]

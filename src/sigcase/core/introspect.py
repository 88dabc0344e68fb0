"""Type introspection: record type -> FieldDescriptor tree.

Records are dataclasses and pydantic models. Fields are visited in declaration
order; each is classified after unwrapping exactly one ``Optional`` layer:

    str -> STRING, bool -> BOOL, int -> INT, bytes-like -> IMAGE,
    other sequences -> ARRAY (item from the element type),
    mappings and records -> OBJECT (properties from the record's fields),
    anything else -> TEXT.

Introspection is total: unrecognized declarations degrade to TEXT.
Self-referential records are not supported.
"""

from __future__ import annotations

import dataclasses
import types
from collections.abc import Iterator, Mapping
from collections.abc import Sequence as AbcSequence
from collections.abc import Set as AbcSet
from typing import Annotated, Any, NamedTuple, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from .fields import FieldDescriptor, FieldType, Tag, merge_tags

_NONE_TYPE = type(None)
_BYTES_TYPES = (bytes, bytearray, memoryview)
SEQUENCE_TYPES = (list, tuple, set, frozenset, AbcSequence, AbcSet)


class RecordField(NamedTuple):
    """One visible field of a record, with its directives resolved."""
    
    identifier: str
    annotation: Any
    tag: Tag


# ─────────────────────────────────────────────────────────────────────────────
# Type Helpers
# ─────────────────────────────────────────────────────────────────────────────


def is_record_type(tp: object) -> bool:
    """Whether tp is a dataclass or pydantic model class."""
    return isinstance(tp, type) and (dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel))


def is_record(value: object) -> bool:
    """Whether value is a dataclass or pydantic model instance."""
    return isinstance(value, BaseModel) or (dataclasses.is_dataclass(value) and not isinstance(value, type))


def strip_annotated(tp: Any) -> tuple[Any, list[Tag]]:
    """Remove ``Annotated`` layers, collecting any Tag metadata found."""
    tags: list[Tag] = []
    while get_origin(tp) is Annotated:
        base, *extras = get_args(tp)
        tags.extend(e for e in extras if isinstance(e, Tag))
        tp = base
    return tp, tags


def is_union(tp: Any) -> bool:
    return get_origin(tp) in (Union, types.UnionType)


def unwrap_optional(tp: Any) -> Any:
    """Unwrap exactly one ``Optional[X]`` / ``X | None`` layer.
    
    Whatever is left is returned as-is, so a second optional layer stays a union
    and classifies as TEXT.
    """
    tp, _ = strip_annotated(tp)
    if is_union(tp):
        args = get_args(tp)
        rest = [a for a in args if a is not _NONE_TYPE]
        if len(rest) == 1 and len(rest) < len(args):
            inner, _ = strip_annotated(rest[0])
            return inner
    return tp


def type_name(tp: Any) -> str:
    """Best-effort display name of a type (origin name for generics)."""
    origin = get_origin(tp)
    target = origin if origin is not None else tp
    return getattr(target, "__name__", "") if isinstance(target, type) else ""


def element_type(tp: Any) -> Any:
    """Element type of a sequence annotation; Any when unparametrized."""
    args = get_args(tp)
    if not args:
        return Any
    if get_origin(tp) is tuple:
        # fixed-shape tuples have no single element type
        return args[0] if len(args) == 2 and args[1] is Ellipsis else Any
    return args[0]


def class_of(tp: Any) -> type | None:
    origin = get_origin(tp)
    target = origin if origin is not None else tp
    return target if isinstance(target, type) else None


def kind_of(tp: Any) -> FieldType:
    """Classify an already-unwrapped annotation."""
    if is_union(tp):
        return FieldType.TEXT
    cls = class_of(tp)
    if cls is None:
        return FieldType.TEXT
    if is_record_type(cls):
        return FieldType.OBJECT
    if issubclass(cls, str):
        return FieldType.STRING
    if issubclass(cls, bool):
        return FieldType.BOOL
    if issubclass(cls, int):
        return FieldType.INT
    if issubclass(cls, _BYTES_TYPES):
        return FieldType.IMAGE
    if issubclass(cls, Mapping):
        return FieldType.OBJECT
    if issubclass(cls, SEQUENCE_TYPES):
        return FieldType.ARRAY
    return FieldType.TEXT


def record_fields(tp: type) -> Iterator[RecordField]:
    """Yield the visible fields of a record type in declaration order."""
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        for name, info in tp.model_fields.items():
            tags = [m for m in info.metadata if isinstance(m, Tag)]
            annotation, inner_tags = strip_annotated(info.annotation)
            if info.description:
                tags.insert(0, Tag(description=info.description))
            yield RecordField(name, annotation, merge_tags([*tags, *inner_tags]))
        return
    
    hints = get_type_hints(tp, include_extras=True)
    for f in dataclasses.fields(tp):
        if f.name.startswith("_"):
            continue
        annotation, tags = strip_annotated(hints.get(f.name, Any))
        if isinstance(meta_tag := f.metadata.get("tag"), Tag):
            tags.insert(0, meta_tag)
        yield RecordField(f.name, annotation, merge_tags(tags))


# ─────────────────────────────────────────────────────────────────────────────
# Descriptor Construction
# ─────────────────────────────────────────────────────────────────────────────


def describe_fields(tp: Any, *, is_input: bool = True) -> tuple[FieldDescriptor, ...]:
    """Describe every visible field of a record type.
    
    Args:
        tp: Record type (dataclass or pydantic model); anything else yields ()
        is_input: Inputs default to an empty prefix, outputs to ``"<name>:"``
    """
    tp, _ = strip_annotated(tp)
    if not is_record_type(tp):
        return ()
    return tuple(describe_field(rf, is_input=is_input) for rf in record_fields(tp))


def describe_field(rf: RecordField, *, is_input: bool) -> FieldDescriptor:
    """Build the descriptor of one field, recursing into arrays and records."""
    tag = rf.tag
    name = tag.name or rf.identifier.lower()
    if tag.prefix is not None:
        prefix = tag.prefix
    else:
        prefix = "" if is_input else f"{name}:"
    
    inner = unwrap_optional(rf.annotation)
    kind = kind_of(inner)
    if tag.type is not None and kind.is_leaf and tag.type.is_leaf:
        kind = tag.type
    
    item = properties = None
    if kind is FieldType.ARRAY:
        item = _describe_element(element_type(inner))
    elif kind is FieldType.OBJECT:
        properties = _describe_properties(inner)
    
    return FieldDescriptor(
        name=name,
        binding_name=rf.identifier,
        type=kind,
        required=tag.required,
        description=tag.description if tag.description is not None else rf.identifier,
        prefix=prefix,
        item=item,
        properties=properties,
        declared_type=rf.annotation,
    )


def _describe_element(elem: Any) -> FieldDescriptor:
    """Describe a sequence element as a synthetic, directive-free input field."""
    elem, _ = strip_annotated(elem)
    return describe_field(RecordField(type_name(elem), elem, Tag()), is_input=True)


def _describe_properties(tp: Any) -> dict[str, FieldDescriptor]:
    """Child descriptors of a record keyed by external name; mappings have none."""
    cls = class_of(tp)
    if cls is None or not is_record_type(cls):
        return {}
    props: dict[str, FieldDescriptor] = {}
    for rf in record_fields(cls):
        child = describe_field(rf, is_input=True)
        props[child.name] = child
    return props

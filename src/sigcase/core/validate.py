"""Runtime validation of record values against FieldDescriptor trees."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sized
from typing import TypeVar

from pydantic import BaseModel

from sigcase.foundation.errors import (
    Err,
    Ok,
    Result,
    SignatureError,
    empty_value,
    not_a_struct,
    required_field_missing,
)
from sigcase.observability import get_logger

from .fields import FieldDescriptor, FieldType
from .introspect import is_record

T = TypeVar("T")

log = get_logger("sigcase.validate")

_MISSING = object()


def is_zero(value: object) -> bool:
    """Whether value is the zero-equivalent of its type.
    
    None, "", 0, 0.0, False and empty collections are zero; a record is zero
    when every one of its fields is zero.
    """
    if value is None:
        return True
    if isinstance(value, (str, bytes, bytearray, int, float, complex)):
        return not value
    if isinstance(value, BaseModel):
        return all(is_zero(getattr(value, name, None)) for name in type(value).model_fields)
    if is_record(value):
        return all(is_zero(getattr(value, f.name, None)) for f in dataclasses.fields(value))  # type: ignore[arg-type]
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def validate(value: T, fields: Iterable[FieldDescriptor], path: str = "input") -> Result[T, SignatureError]:
    """Check that every required field of value is present and non-zero.
    
    Fails fast on the first violation. Required OBJECT fields are checked
    recursively against their properties; ARRAY items are not inspected.
    
    Args:
        value: Record instance (dataclass or pydantic model)
        fields: Expected descriptors for this level
        path: Dotted location used in error messages
    
    Returns:
        Ok(value) or Err(SignatureError)
    """
    if value is None:
        return _fail(empty_value(path))
    if not is_record(value):
        return _fail(not_a_struct(path, value))
    
    for expected in fields:
        if not expected.required:
            continue
        
        field_value = getattr(value, expected.binding_name, _MISSING)
        if field_value is _MISSING or is_zero(field_value):
            return _fail(required_field_missing(path, expected.name))
        
        if expected.type is FieldType.OBJECT and expected.properties is not None:
            nested = validate(field_value, expected.properties.values(), f"{path}.{expected.name}")
            if nested.is_err():
                return nested  # type: ignore[return-value]
    
    return Ok(value)


def _fail(error: SignatureError) -> Result[T, SignatureError]:
    log.debug("validation failed", code=str(error.code), path=error.path)
    return Err(error)

"""Core: field metadata, type introspection, validation and TypedSignature."""

from .fields import UNKNOWN, FieldDescriptor, FieldType, SignatureMetadata, Tag, merge_tags
from .introspect import RecordField, describe_field, describe_fields, is_record, is_record_type, kind_of
from .validate import is_zero, validate

__all__ = [
    "UNKNOWN",
    "FieldType",
    "FieldDescriptor",
    "SignatureMetadata",
    "Tag",
    "merge_tags",
    "RecordField",
    "describe_field",
    "describe_fields",
    "is_record",
    "is_record_type",
    "kind_of",
    "is_zero",
    "validate",
]

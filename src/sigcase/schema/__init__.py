"""Schema synthesis: record types -> SchemaNode documents."""

from .node import SchemaNode, SchemaType
from .synthesize import build_schema, schema_from_document, schema_from_json

to_schema = build_schema

__all__ = [
    "SchemaNode",
    "SchemaType",
    "build_schema",
    "to_schema",
    "schema_from_document",
    "schema_from_json",
]

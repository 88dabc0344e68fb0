"""sigcase - Typed signatures for LLM programs.

Declare the inputs and outputs of a prompt as dataclasses or pydantic models;
sigcase introspects them into field metadata (cached per type pair), validates
values against it, synthesizes Gemini-compatible response schemas, and bridges
to untyped ``"question -> answer"`` signatures.

Quick Start:
    >>> from dataclasses import dataclass
    >>> from typing import Annotated
    >>> from sigcase import Tag, TypedSignature
    >>>
    >>> @dataclass
    ... class Question:
    ...     text: Annotated[str, Tag("question,required")]
    ...
    >>> @dataclass
    ... class Answer:
    ...     answer: Annotated[str, Tag(description="Final answer")]
    ...     confidence: float = 0.0
    ...
    >>> sig = TypedSignature.cached(Question, Answer)
    >>> sig.validate_input(Question(text="")).unwrap_err().render()
    "[REQUIRED_FIELD_MISSING] required field 'input.question' cannot be empty"

Schemas:
    >>> from sigcase import build_schema
    >>> build_schema(Answer).to_json()
    '{"properties":{"answer":{"description":"Final answer","type":"STRING"},...'

Shorthand:
    >>> from sigcase import shorthand, upgrade
    >>> print(shorthand("question, context -> answer"))
    Inputs:
      - question ()
      - context ()
    Outputs:
      - answer ()
"""

from __future__ import annotations

__version__ = "0.1.0"

# Core
from .core import (
    UNKNOWN,
    FieldDescriptor,
    FieldType,
    SignatureMetadata,
    Tag,
    describe_fields,
    validate,
)
from .core.signature import TypedSignature

# Errors
from .foundation.errors import (
    Err,
    ErrorCode,
    Ok,
    Result,
    SignatureError,
    SignatureException,
)

# Schema
from .schema import (
    SchemaNode,
    SchemaType,
    build_schema,
    schema_from_document,
    schema_from_json,
    to_schema,
)

# Registry
from .registry import (
    SignatureRegistry,
    describe,
    get_registry,
    reset_registry,
    set_registry,
)

# Legacy signatures
from .legacy import (
    LegacyField,
    Signature,
    downgrade,
    parse_shorthand,
    render,
    shorthand,
    upgrade,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "FieldType",
    "FieldDescriptor",
    "SignatureMetadata",
    "Tag",
    "UNKNOWN",
    "describe_fields",
    "validate",
    "TypedSignature",
    # Errors
    "ErrorCode",
    "SignatureError",
    "SignatureException",
    "Result",
    "Ok",
    "Err",
    # Schema
    "SchemaNode",
    "SchemaType",
    "build_schema",
    "to_schema",
    "schema_from_json",
    "schema_from_document",
    # Registry
    "SignatureRegistry",
    "describe",
    "get_registry",
    "set_registry",
    "reset_registry",
    # Legacy
    "LegacyField",
    "Signature",
    "parse_shorthand",
    "shorthand",
    "render",
    "downgrade",
    "upgrade",
]

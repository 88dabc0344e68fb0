"""Untyped signatures: shorthand parsing, rendering and typed/legacy conversion."""

from .bridge import downgrade, render, upgrade
from .shorthand import parse_shorthand, shorthand
from .signature import (
    LegacyField,
    Signature,
    bool_field,
    int_field,
    new_field,
    new_signature,
    string_field,
)

__all__ = [
    "LegacyField",
    "Signature",
    "new_signature",
    "new_field",
    "int_field",
    "bool_field",
    "string_field",
    "parse_shorthand",
    "shorthand",
    "render",
    "downgrade",
    "upgrade",
]

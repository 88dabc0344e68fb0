"""Conversion between typed SignatureMetadata and untyped Signature, and rendering."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from sigcase.core.fields import UNKNOWN, FieldDescriptor, FieldType, SignatureMetadata

from .signature import LegacyField, Signature


class _RenderableField(Protocol):
    name: str
    description: str
    type: FieldType


def _render_fields(fields: Iterable[_RenderableField]) -> str:
    lines = []
    for f in fields:
        kind = "" if f.type is FieldType.TEXT else f" [{f.type}]"
        lines.append(f"  - {f.name}{kind} ({f.description})\n")
    return "".join(lines)


def render(sig: Signature | SignatureMetadata) -> str:
    """Canonical multi-line text of a typed or untyped signature.
    
    Example:
        >>> print(render(shorthand("question -> answer")))
        Inputs:
          - question ()
        Outputs:
          - answer ()
    """
    text = f"Inputs:\n{_render_fields(sig.inputs)}Outputs:\n{_render_fields(sig.outputs)}"
    if sig.instruction:
        text += f"Instruction: {sig.instruction}\n"
    return text


# ─────────────────────────────────────────────────────────────────────────────
# Typed <-> Legacy
# ─────────────────────────────────────────────────────────────────────────────


def _downgrade_field(f: FieldDescriptor) -> LegacyField:
    return LegacyField(name=f.name, description=f.description, type=f.type)


def downgrade(metadata: SignatureMetadata) -> Signature:
    """Lossy typed -> untyped conversion.
    
    Keeps name, description and type; drops prefix, required flags and nested
    item/properties.
    """
    return Signature(
        inputs=tuple(_downgrade_field(f) for f in metadata.inputs),
        outputs=tuple(_downgrade_field(f) for f in metadata.outputs),
        instruction=metadata.instruction,
    )


def _upgrade_field(f: LegacyField) -> FieldDescriptor:
    item = properties = None
    if f.type is FieldType.ARRAY:
        item = FieldDescriptor(name="", binding_name="")
    elif f.type is FieldType.OBJECT:
        properties = {}
    return FieldDescriptor(
        name=f.name,
        binding_name=f.name,
        type=f.type,
        required=False,
        description=f.description,
        prefix=f.prefix,
        item=item,
        properties=properties,
        declared_type=UNKNOWN,
    )


def upgrade(sig: Signature) -> SignatureMetadata:
    """Untyped -> typed conversion.
    
    Every field becomes optional with an unknown declared type; the binding name
    is the field name. Array fields get an untyped TEXT item and object fields
    empty properties.
    """
    return SignatureMetadata(
        inputs=tuple(_upgrade_field(f) for f in sig.inputs),
        outputs=tuple(_upgrade_field(f) for f in sig.outputs),
        instruction=sig.instruction,
    )

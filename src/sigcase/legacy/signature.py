"""Untyped signatures: fields carrying only name, description, prefix and type."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from sigcase.core.fields import FieldType


@dataclass(frozen=True, slots=True)
class LegacyField:
    """Untyped field used by shorthand parsing and lossy typed->legacy conversion."""
    
    name: str
    description: str = ""
    prefix: str = ""
    type: FieldType = FieldType.TEXT


@dataclass(frozen=True, slots=True)
class Signature:
    """Ordered untyped inputs and outputs plus an optional instruction.
    
    Instances are immutable; the ``with_*``/``append_*``/``prepend_*`` helpers
    return modified copies.
    
    Example:
        >>> sig = Signature(inputs=[LegacyField("question")], outputs=[LegacyField("answer")])
        >>> print(sig.with_instruction("Be brief"))
        Inputs:
          - question ()
        Outputs:
          - answer ()
        Instruction: Be brief
    """
    
    inputs: tuple[LegacyField, ...] = ()
    outputs: tuple[LegacyField, ...] = ()
    instruction: str = ""
    
    def __post_init__(self) -> None:
        object.__setattr__(self, "inputs", tuple(self.inputs))
        object.__setattr__(self, "outputs", tuple(self.outputs))
    
    def with_instruction(self, instruction: str) -> Signature:
        return replace(self, instruction=instruction)
    
    def append_input(self, name: str, prefix: str = "", description: str = "") -> Signature:
        """Return a copy with a text input appended at the end."""
        return replace(self, inputs=(*self.inputs, LegacyField(name, description, prefix)))
    
    def prepend_output(self, name: str, prefix: str = "", description: str = "") -> Signature:
        """Return a copy with a text output inserted first."""
        return replace(self, outputs=(LegacyField(name, description, prefix), *self.outputs))
    
    @property
    def input_names(self) -> list[str]:
        return [f.name for f in self.inputs]
    
    @property
    def output_names(self) -> list[str]:
        return [f.name for f in self.outputs]
    
    def __str__(self) -> str:
        from .bridge import render
        return render(self)


def new_signature(inputs: Iterable[LegacyField], outputs: Iterable[LegacyField]) -> Signature:
    return Signature(inputs=tuple(inputs), outputs=tuple(outputs))


# ─────────────────────────────────────────────────────────────────────────────
# Field Builders
# ─────────────────────────────────────────────────────────────────────────────


def new_field(
    name: str,
    *,
    description: str = "",
    prefix: str | None = None,
    type: FieldType = FieldType.TEXT,
) -> LegacyField:
    """Create a legacy field; the prefix defaults to ``"<name>:"``.
    
    Pass ``prefix=""`` for no prefix at all.
    """
    return LegacyField(
        name=name,
        description=description,
        prefix=f"{name}:" if prefix is None else prefix,
        type=type,
    )


def int_field(name: str, *, description: str = "", prefix: str | None = None) -> LegacyField:
    return new_field(name, description=description, prefix=prefix, type=FieldType.INT)


def bool_field(name: str, *, description: str = "", prefix: str | None = None) -> LegacyField:
    return new_field(name, description=description, prefix=prefix, type=FieldType.BOOL)


def string_field(name: str, *, description: str = "", prefix: str | None = None) -> LegacyField:
    return new_field(name, description=description, prefix=prefix, type=FieldType.STRING)

"""Field and signature metadata produced by type introspection.

A ``FieldDescriptor`` describes one field of a record type: its external name,
the attribute it binds to, its semantic ``FieldType`` and, for arrays and
objects, the nested descriptors. ``SignatureMetadata`` groups the input and
output descriptors of a signature with an optional instruction.

Per-field directives are declared with ``Tag``:

    >>> @dataclass
    ... class Answer:
    ...     text: Annotated[str, Tag("answer,required", description="Final answer")]
    ...     sources: list[str] = field(default_factory=list)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Final


class FieldType(StrEnum):
    """Semantic classification of a field."""
    TEXT = "text"
    STRING = "string"
    INT = "int"
    BOOL = "bool"
    ARRAY = "array"
    OBJECT = "object"
    IMAGE = "image"
    AUDIO = "audio"

    @property
    def is_leaf(self) -> bool:
        """Whether the type carries no nested descriptors."""
        return self not in (FieldType.ARRAY, FieldType.OBJECT)


class _Unknown:
    """Marker for descriptors whose declared type is not known (legacy signatures)."""
    
    __slots__ = ()
    
    def __repr__(self) -> str:
        return "UNKNOWN"
    
    def __reduce__(self) -> str:
        return "UNKNOWN"


UNKNOWN: Final = _Unknown()


# ─────────────────────────────────────────────────────────────────────────────
# Directives
# ─────────────────────────────────────────────────────────────────────────────

_OPTIONAL_FLAGS = frozenset({"optional", "omitempty"})


@dataclass(frozen=True, slots=True)
class Tag:
    """Per-field directive attached via ``Annotated`` or dataclass field metadata.
    
    Args:
        spec: ``"<name>[,required][,optional]"``. An empty name keeps the default.
            ``omitempty`` is accepted as a synonym of ``optional``.
        description: Overrides the default description (the field identifier)
        prefix: Overrides the default rendering prefix
        type: Forces a leaf FieldType (e.g. ``FieldType.AUDIO`` for raw audio bytes)
    """
    
    spec: str = ""
    description: str | None = None
    prefix: str | None = None
    type: FieldType | None = None
    
    @property
    def name(self) -> str | None:
        head = self.spec.split(",", 1)[0].strip()
        return head or None
    
    @property
    def flags(self) -> frozenset[str]:
        return frozenset(p.strip() for p in self.spec.split(",")[1:] if p.strip())
    
    @property
    def required(self) -> bool:
        return "required" in self.flags
    
    @property
    def optional(self) -> bool:
        return not self.flags.isdisjoint(_OPTIONAL_FLAGS)


def merge_tags(tags: list[Tag]) -> Tag:
    """Fold several directives into one; later tags win per attribute."""
    if not tags:
        return Tag()
    if len(tags) == 1:
        return tags[0]
    merged = tags[0]
    for tag in tags[1:]:
        merged = Tag(
            spec=tag.spec or merged.spec,
            description=tag.description if tag.description is not None else merged.description,
            prefix=tag.prefix if tag.prefix is not None else merged.prefix,
            type=tag.type or merged.type,
        )
    return merged


# ─────────────────────────────────────────────────────────────────────────────
# Descriptors
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Recursive description of one field.
    
    Attributes:
        name: External name, unique among siblings
        binding_name: Attribute name used to locate the value at runtime
        required: Whether the validator insists on a non-zero value
        description: Human-readable description
        prefix: Rendering prefix (``"<name>:"`` for outputs by default)
        type: Semantic classification
        item: Element descriptor (ARRAY only)
        properties: Child descriptors by name (OBJECT only), read-only
        declared_type: The declared Python type, or ``UNKNOWN``
    """
    
    name: str
    binding_name: str
    type: FieldType = FieldType.TEXT
    required: bool = False
    description: str = ""
    prefix: str = ""
    item: FieldDescriptor | None = None
    properties: Mapping[str, FieldDescriptor] | None = field(default=None, hash=False)
    declared_type: Any = field(default=UNKNOWN, hash=False, compare=False)
    
    def __post_init__(self) -> None:
        if self.properties is not None and not isinstance(self.properties, MappingProxyType):
            object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
        match self.type:
            case FieldType.ARRAY:
                if self.item is None or self.properties is not None:
                    raise ValueError(f"array field '{self.name}' needs an item and no properties")
            case FieldType.OBJECT:
                if self.properties is None or self.item is not None:
                    raise ValueError(f"object field '{self.name}' needs properties and no item")
            case _:
                if self.item is not None or self.properties is not None:
                    raise ValueError(f"{self.type} field '{self.name}' cannot carry item or properties")
    
    @property
    def is_leaf(self) -> bool:
        return self.type.is_leaf


@dataclass(frozen=True, slots=True)
class SignatureMetadata:
    """Ordered input/output descriptors plus an optional instruction."""
    
    inputs: tuple[FieldDescriptor, ...] = ()
    outputs: tuple[FieldDescriptor, ...] = ()
    instruction: str = ""
    
    def __post_init__(self) -> None:
        object.__setattr__(self, "inputs", tuple(self.inputs))
        object.__setattr__(self, "outputs", tuple(self.outputs))
    
    def with_instruction(self, instruction: str) -> SignatureMetadata:
        return replace(self, instruction=instruction)
    
    def append_input(self, name: str, prefix: str = "", description: str = "") -> SignatureMetadata:
        """Return a copy with a text input appended; self is left unmodified."""
        return replace(self, inputs=(*self.inputs, _loose_field(name, prefix, description)))
    
    def prepend_output(self, name: str, prefix: str = "", description: str = "") -> SignatureMetadata:
        """Return a copy with a text output inserted first; self is left unmodified."""
        return replace(self, outputs=(_loose_field(name, prefix, description), *self.outputs))
    
    def input(self, name: str) -> FieldDescriptor | None:
        return next((f for f in self.inputs if f.name == name), None)
    
    def output(self, name: str) -> FieldDescriptor | None:
        return next((f for f in self.outputs if f.name == name), None)


def _loose_field(name: str, prefix: str, description: str) -> FieldDescriptor:
    return FieldDescriptor(name=name, binding_name=name, prefix=prefix, description=description)

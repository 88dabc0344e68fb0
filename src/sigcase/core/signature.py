"""TypedSignature: an input type and an output type bound to their metadata."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sigcase.foundation.errors import Result, SignatureError

from .fields import SignatureMetadata
from .validate import validate

if TYPE_CHECKING:
    from sigcase.legacy import Signature
    from sigcase.registry import SignatureRegistry
    from sigcase.schema import SchemaNode

I = TypeVar("I")
O = TypeVar("O")


@dataclass(frozen=True, slots=True)
class TypedSignature(Generic[I, O]):
    """Typed pairing of input/output record types with their SignatureMetadata.
    
    Build with ``TypedSignature.cached`` to share metadata through the registry,
    or ``TypedSignature.create`` to introspect afresh.
    
    Example:
        >>> sig = TypedSignature.cached(Question, Answer).with_instruction("Answer briefly")
        >>> sig.validate_input(Question(text="Why?")).is_ok()
        True
        >>> print(sig.to_legacy())
        Inputs:
          - question [string] (text)
        Outputs:
          - answer [string] (Final answer)
          - confidence (confidence)
        Instruction: Answer briefly
    """
    
    input_type: type[I] | Any
    output_type: type[O] | Any
    metadata: SignatureMetadata
    
    @classmethod
    def create(cls, input_type: type[I], output_type: type[O]) -> TypedSignature[I, O]:
        """Introspect both types without consulting the registry."""
        from sigcase.registry import build_signature_metadata
        return cls(input_type, output_type, build_signature_metadata(input_type, output_type))
    
    @classmethod
    def cached(
        cls,
        input_type: type[I],
        output_type: type[O],
        *,
        registry: SignatureRegistry | None = None,
    ) -> TypedSignature[I, O]:
        """Bind metadata from the registry (the global one by default)."""
        from sigcase.registry import describe
        return cls(input_type, output_type, describe(input_type, output_type, registry=registry))
    
    @classmethod
    def from_legacy(cls, sig: Signature) -> TypedSignature[dict[str, Any], dict[str, Any]]:
        """Wrap an untyped signature; both bound types are ``dict``."""
        from sigcase.legacy import upgrade
        return cls(dict, dict, upgrade(sig))
    
    # ─── Validation ──────────────────────────────────────────────────
    
    def validate_input(self, value: I) -> Result[I, SignatureError]:
        return validate(value, self.metadata.inputs, "input")
    
    def validate_output(self, value: O) -> Result[O, SignatureError]:
        return validate(value, self.metadata.outputs, "output")
    
    # ─── Derivation ──────────────────────────────────────────────────
    
    def with_instruction(self, instruction: str) -> TypedSignature[I, O]:
        """Copy with a new instruction; cached metadata is never mutated."""
        return replace(self, metadata=self.metadata.with_instruction(instruction))
    
    def to_legacy(self) -> Signature:
        from sigcase.legacy import downgrade
        return downgrade(self.metadata)
    
    def input_schema(self) -> SchemaNode:
        from sigcase.schema import build_schema
        return build_schema(self.input_type)
    
    def output_schema(self) -> SchemaNode:
        from sigcase.schema import build_schema
        return build_schema(self.output_type)
    
    def __str__(self) -> str:
        from sigcase.legacy import render
        return render(self.metadata)

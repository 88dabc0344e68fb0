"""Process-lifetime cache of signature metadata keyed by type identity.

The registry provides:
- Get-or-create of SignatureMetadata per (input type, output type) pair
- Lock sharding, so unrelated keys never wait on each other
- Convergence under races: concurrent first builders all receive the single
  published instance
- A module-level default instance (get_registry/set_registry/reset_registry)
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sigcase.core.fields import SignatureMetadata
from sigcase.core.introspect import describe_fields, type_name
from sigcase.observability import get_logger

log = get_logger("sigcase.registry")

MetadataBuilder = Callable[[Any, Any], SignatureMetadata]


@dataclass(frozen=True, slots=True)
class SignatureCacheKey:
    """Identity pair of the declared input and output types."""
    
    input_type: Any
    output_type: Any


def build_signature_metadata(input_type: Any, output_type: Any) -> SignatureMetadata:
    """Introspect both types into a fresh SignatureMetadata."""
    return SignatureMetadata(
        inputs=describe_fields(input_type, is_input=True),
        outputs=describe_fields(output_type, is_input=False),
    )


class _Shard:
    __slots__ = ("entries", "lock")
    
    def __init__(self) -> None:
        self.entries: dict[SignatureCacheKey, SignatureMetadata] = {}
        self.lock = threading.Lock()


class SignatureRegistry:
    """Thread-safe get-or-create cache of signature metadata.
    
    Lookups are lock-free. On a miss the metadata is built outside any lock and
    published with ``setdefault`` under the shard lock: the first published value
    wins and every later builder discards its own result. Entries are never
    evicted.
    
    Args:
        shards: Number of lock shards (default from ``SIGCASE_REGISTRY_SHARDS``)
        builder: Metadata factory, ``build_signature_metadata`` by default
    
    Example:
        >>> registry = SignatureRegistry()
        >>> meta = registry.get_or_create(Question, Answer)
        >>> registry.get_or_create(Question, Answer) is meta
        True
    """
    
    __slots__ = ("_shards", "_builder")
    
    def __init__(self, shards: int | None = None, *, builder: MetadataBuilder | None = None) -> None:
        if shards is None:
            from sigcase.foundation.config import get_settings
            shards = get_settings().registry.shards
        if shards < 1:
            raise ValueError(f"shards must be >= 1, got {shards}")
        self._shards = tuple(_Shard() for _ in range(shards))
        self._builder = builder or build_signature_metadata
    
    def _shard(self, key: SignatureCacheKey) -> _Shard:
        return self._shards[hash(key) % len(self._shards)]
    
    def get(self, input_type: Any, output_type: Any) -> SignatureMetadata | None:
        """Published metadata for the pair, or None."""
        key = SignatureCacheKey(input_type, output_type)
        return self._shard(key).entries.get(key)
    
    def get_or_create(self, input_type: Any, output_type: Any) -> SignatureMetadata:
        """Return the published metadata for the pair, building it on first use."""
        key = SignatureCacheKey(input_type, output_type)
        shard = self._shard(key)
        if (cached := shard.entries.get(key)) is not None:
            return cached
        
        built = self._builder(input_type, output_type)
        with shard.lock:
            published = shard.entries.setdefault(key, built)
        
        if published is built:
            log.debug("signature cached", input=type_name(input_type), output=type_name(output_type),
                      inputs=len(built.inputs), outputs=len(built.outputs))
        else:
            log.debug("signature build discarded", input=type_name(input_type), output=type_name(output_type))
        return published
    
    def __contains__(self, key: object) -> bool:
        if not isinstance(key, SignatureCacheKey):
            if not (isinstance(key, tuple) and len(key) == 2):
                return False
            key = SignatureCacheKey(*key)
        return key in self._shard(key).entries
    
    def __len__(self) -> int:
        return sum(len(s.entries) for s in self._shards)
    
    def stats(self) -> dict[str, int]:
        """Registry statistics for monitoring."""
        sizes = [len(s.entries) for s in self._shards]
        return {"entries": sum(sizes), "shards": len(sizes), "largest_shard": max(sizes)}


# ─────────────────────────────────────────────────────────────────────────────
# Global Registry
# ─────────────────────────────────────────────────────────────────────────────

_registry: SignatureRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> SignatureRegistry:
    """Get the global signature registry instance."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = SignatureRegistry()
    return _registry


def set_registry(registry: SignatureRegistry) -> None:
    """Replace the global registry."""
    global _registry
    _registry = registry


def reset_registry() -> None:
    """Drop the global registry (useful for testing)."""
    global _registry
    _registry = None


def describe(
    input_type: Any,
    output_type: Any = None,
    *,
    registry: SignatureRegistry | None = None,
) -> SignatureMetadata:
    """Cached SignatureMetadata for an input/output record pair.
    
    Args:
        input_type: Input record type (or None for no inputs)
        output_type: Output record type (or None for no outputs)
        registry: Registry to use; the global one by default
    """
    return (registry if registry is not None else get_registry()).get_or_create(input_type, output_type)

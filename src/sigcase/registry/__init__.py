"""Signature registry: thread-safe cache of introspection results."""

from .registry import (
    MetadataBuilder,
    SignatureCacheKey,
    SignatureRegistry,
    build_signature_metadata,
    describe,
    get_registry,
    reset_registry,
    set_registry,
)

__all__ = [
    "MetadataBuilder",
    "SignatureCacheKey",
    "SignatureRegistry",
    "build_signature_metadata",
    "describe",
    "get_registry",
    "reset_registry",
    "set_registry",
]

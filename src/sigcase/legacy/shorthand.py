"""Shorthand notation: ``"question, context -> answer"``.

Exactly one ``->`` separates comma-separated input names from output names.
Names are stripped of surrounding whitespace and must be non-empty. Every
parsed field is TEXT with empty description and prefix.
"""

from __future__ import annotations

from sigcase.foundation.errors import Err, Ok, Result, SignatureError, SignatureException, malformed_signature
from sigcase.observability import get_logger

from .signature import LegacyField, Signature

log = get_logger("sigcase.shorthand")

ARROW = "->"


def parse_shorthand(text: str) -> Result[Signature, SignatureError]:
    """Parse shorthand notation into an untyped Signature.
    
    Returns:
        Ok(Signature) or Err with code MALFORMED_SIGNATURE
    """
    parts = text.split(ARROW)
    if len(parts) != 2:
        return _malformed(text, f"expected exactly one '{ARROW}', found {len(parts) - 1}")
    
    sides: list[tuple[LegacyField, ...]] = []
    for label, part in zip(("input", "output"), parts):
        names = [n.strip() for n in part.strip().split(",")]
        if any(not n for n in names):
            return _malformed(text, f"empty {label} field name")
        sides.append(tuple(LegacyField(name=n) for n in names))
    
    return Ok(Signature(inputs=sides[0], outputs=sides[1]))


def shorthand(text: str) -> Signature:
    """Parse shorthand notation, raising SignatureException on malformed input."""
    result = parse_shorthand(text)
    if result.is_err():
        raise SignatureException(result.unwrap_err())
    return result.unwrap()


def _malformed(text: str, reason: str) -> Result[Signature, SignatureError]:
    log.debug("shorthand rejected", text=text, reason=reason)
    return Err(malformed_signature(text, reason))

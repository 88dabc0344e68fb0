"""Unified error handling for sigcase.

- ErrorCode: Failure classification
- SignatureError/SignatureException: Structured errors and exceptions
- Result/Ok/Err: Monadic error handling, failures returned as values
"""

from .errors import (
    ErrorCode,
    SignatureError,
    SignatureException,
    empty_value,
    malformed_signature,
    not_a_struct,
    required_field_missing,
    schema_decode_failed,
)
from .result import Err, Ok, Result, sequence
from .types import JsonDict, JsonPrimitive, JsonValue

__all__ = [
    # Core errors
    "ErrorCode", "SignatureError", "SignatureException",
    "empty_value", "malformed_signature", "not_a_struct", "required_field_missing", "schema_decode_failed",
    # Result monad
    "Result", "Ok", "Err", "sequence",
    # Aliases
    "JsonDict", "JsonPrimitive", "JsonValue",
]

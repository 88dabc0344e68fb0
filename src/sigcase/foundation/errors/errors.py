"""Standardized error model for signature operations.

Failures are reported as values: a frozen ``SignatureError`` carried inside an
``Err`` result. ``SignatureException`` wraps the same error for call sites that
prefer raising.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ErrorCode(StrEnum):
    """Machine-readable failure classification."""
    MALFORMED_SIGNATURE = "MALFORMED_SIGNATURE"
    EMPTY_VALUE = "EMPTY_VALUE"
    NOT_A_STRUCT = "NOT_A_STRUCT"
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    SCHEMA_DECODE_FAILED = "SCHEMA_DECODE_FAILED"


_VALIDATION_CODES: frozenset[ErrorCode] = frozenset({
    ErrorCode.EMPTY_VALUE,
    ErrorCode.NOT_A_STRUCT,
    ErrorCode.REQUIRED_FIELD_MISSING,
})


class SignatureError(BaseModel):
    """Structured failure from parsing, validation or schema decoding.
    
    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
        path: Dotted location of the failure (e.g. ``input.address.city``)
        details: Optional extra information (e.g. decoder output)
    """
    
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "title": "Signature Error",
            "examples": [{
                "code": "REQUIRED_FIELD_MISSING",
                "message": "required field 'input.question' cannot be empty",
                "path": "input.question",
            }],
        },
    )
    
    code: ErrorCode
    message: Annotated[str, Field(min_length=1)]
    path: str = ""
    details: str | None = Field(default=None, repr=False)
    
    @computed_field
    @property
    def is_validation_error(self) -> bool:
        """Whether this error came from the runtime validator."""
        return self.code in _VALIDATION_CODES
    
    @classmethod
    def create(cls, code: ErrorCode, message: str, *, path: str = "", details: str | None = None) -> Self:
        """Factory method for construction."""
        return cls(code=code, message=message, path=path, details=details)
    
    def render(self) -> str:
        """Format error as a single readable block."""
        parts = [f"[{self.code}] {self.message}"]
        if self.details:
            parts.append(f"\nDetails:\n{self.details}")
        return "".join(parts)
    
    __str__ = render


class SignatureException(Exception):
    """Exception wrapping a SignatureError for raising."""
    
    __slots__ = ("error",)
    
    def __init__(self, error: SignatureError) -> None:
        self.error = error
        super().__init__(error.message)
    
    @property
    def code(self) -> ErrorCode:
        return self.error.code
    
    @classmethod
    def create(cls, code: ErrorCode, message: str, *, path: str = "") -> Self:
        return cls(SignatureError.create(code, message, path=path))


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors used by the core components
# ═══════════════════════════════════════════════════════════════════════════════


def malformed_signature(text: str, reason: str) -> SignatureError:
    return SignatureError.create(ErrorCode.MALFORMED_SIGNATURE, f"invalid signature format: {text!r} ({reason})")


def empty_value(path: str) -> SignatureError:
    return SignatureError.create(ErrorCode.EMPTY_VALUE, f"{path} cannot be None", path=path)


def not_a_struct(path: str, value: object) -> SignatureError:
    return SignatureError.create(
        ErrorCode.NOT_A_STRUCT,
        f"{path} must be a record, got {type(value).__name__}",
        path=path,
    )


def required_field_missing(path: str, name: str) -> SignatureError:
    return SignatureError.create(
        ErrorCode.REQUIRED_FIELD_MISSING,
        f"required field '{path}.{name}' cannot be empty",
        path=f"{path}.{name}",
    )


def schema_decode_failed(reason: str, details: str | None = None) -> SignatureError:
    return SignatureError.create(
        ErrorCode.SCHEMA_DECODE_FAILED,
        f"getting schema from json failed: {reason}",
        details=details,
    )

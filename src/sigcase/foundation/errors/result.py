"""Result/Either monad for returning failures as values.

Every fallible operation in sigcase (shorthand parsing, validation, schema
decoding) hands back a Result instead of raising:
- Functor: map, map_err
- Monad: flat_map (bind)
- Railway-oriented composition via and_then / or_else
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")

# Sentinel for faster Ok/Err construction
_OK = True
_ERR = False


class Result(Generic[T, E]):
    """Discriminated union representing success (Ok) or failure (Err).
    
    Examples:
        >>> Ok(42).map(lambda x: x * 2).unwrap()
        84
        >>> Err("fail").map(lambda x: x * 2).unwrap_err()
        'fail'
        >>> parse_shorthand("q -> a").map(len).unwrap()
        2
    """
    
    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_value",)
    
    def __init__(self, value: T | E, is_ok: bool) -> None:
        self._value = value
        self._is_ok = is_ok
    
    # ─── Type Checking ───────────────────────────────────────────────
    
    def is_ok(self) -> bool:
        return self._is_ok
    
    def is_err(self) -> bool:
        return not self._is_ok
    
    # ─── Value Extraction ────────────────────────────────────────────
    
    def unwrap(self) -> T:
        """Extract Ok value. Raises RuntimeError on Err."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"Called unwrap() on Err value: {self._value}")
    
    def unwrap_err(self) -> E:
        """Extract Err value. Raises RuntimeError on Ok."""
        if not self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"Called unwrap_err() on Ok value: {self._value}")
    
    def unwrap_or(self, default: T) -> T:
        return self._value if self._is_ok else default  # type: ignore[return-value]
    
    def expect(self, msg: str) -> T:
        """Extract Ok value with a custom panic message."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"{msg}: {self._value}")
    
    def ok(self) -> T | None:
        return self._value if self._is_ok else None  # type: ignore[return-value]
    
    def err(self) -> E | None:
        return None if self._is_ok else self._value  # type: ignore[return-value]
    
    # ─── Functor / Monad ─────────────────────────────────────────────
    
    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        return Result(f(self._value), _OK) if self._is_ok else self  # type: ignore[arg-type, return-value]
    
    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        return self if self._is_ok else Result(f(self._value), _ERR)  # type: ignore[arg-type, return-value]
    
    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Monadic bind: chain operations that can fail."""
        return f(self._value) if self._is_ok else self  # type: ignore[arg-type, return-value]
    
    and_then = flat_map
    
    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Recover from Err; Ok passes through."""
        return self if self._is_ok else f(self._value)  # type: ignore[arg-type, return-value]
    
    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Pattern match on both variants."""
        return ok(self._value) if self._is_ok else err(self._value)  # type: ignore[arg-type]
    
    # ─── Dunder Methods ──────────────────────────────────────────────
    
    def __bool__(self) -> bool:
        return self._is_ok
    
    def __repr__(self) -> str:
        return f"{'Ok' if self._is_ok else 'Err'}({self._value!r})"
    
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._is_ok == other._is_ok and self._value == other._value
    
    def __hash__(self) -> int:
        return hash((self._is_ok, self._value))
    
    def __iter__(self) -> Iterator[T]:
        """Iterate: yields value if Ok, nothing if Err."""
        if self._is_ok:
            yield self._value  # type: ignore[misc]


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    """Construct Ok variant (success)."""
    return Result(value, _OK)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    """Construct Err variant (failure)."""
    return Result(error, _ERR)


def sequence(results: list[Result[T, E]]) -> Result[list[T], E]:
    """List[Result[T,E]] → Result[List[T], E]. Fail-fast on first Err."""
    values: list[T] = []
    for r in results:
        if not r._is_ok:
            return Result(r._value, _ERR)  # type: ignore[arg-type]
        values.append(r._value)  # type: ignore[arg-type]
    return Result(values, _OK)

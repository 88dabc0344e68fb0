"""Tests for the Result type carrying signature operation outcomes.

Validates:
- Functor and monad laws
- Accessors and combinators
- Chaining parse -> validate style pipelines
"""

from __future__ import annotations

from typing import Callable

import pytest

from sigcase.foundation.errors import ErrorCode, Err, Ok, Result, SignatureError, sequence
from sigcase.legacy import parse_shorthand


# ═════════════════════════════════════════════════════════════════════════════
# Laws
# ═════════════════════════════════════════════════════════════════════════════


def test_functor_identity() -> None:
    """Functor law: fmap id = id"""
    assert Ok(42).map(lambda x: x) == Ok(42)
    assert Err("fail").map(lambda x: x) == Err("fail")


def test_functor_composition() -> None:
    """Functor law: fmap (f . g) = fmap f . fmap g"""
    f: Callable[[int], int] = lambda x: x + 1
    g: Callable[[int], int] = lambda x: x * 2
    result: Result[int, str] = Ok(5)
    assert result.map(lambda x: f(g(x))) == result.map(g).map(f)


def test_monad_identities() -> None:
    """Monad laws: return a >>= f = f a, m >>= return = m"""
    f: Callable[[int], Result[int, str]] = lambda x: Ok(x * 2)
    assert Ok(21).flat_map(f) == f(21)
    assert Ok(42).flat_map(Ok) == Ok(42)


def test_monad_associativity() -> None:
    m: Result[int, str] = Ok(5)
    f: Callable[[int], Result[int, str]] = lambda x: Ok(x + 1)
    g: Callable[[int], Result[int, str]] = lambda x: Ok(x * 2)
    assert m.flat_map(f).flat_map(g) == m.flat_map(lambda x: f(x).flat_map(g))


# ═════════════════════════════════════════════════════════════════════════════
# Operations
# ═════════════════════════════════════════════════════════════════════════════


def test_ok_accessors() -> None:
    result: Result[int, str] = Ok(42)
    assert result.is_ok() and not result.is_err()
    assert result.unwrap() == 42
    assert result.ok() == 42
    assert result.err() is None
    assert result.expect("should not fail") == 42


def test_err_accessors() -> None:
    result: Result[int, str] = Err("failed")
    assert result.is_err()
    assert result.unwrap_err() == "failed"
    assert result.ok() is None
    assert result.unwrap_or(7) == 7


def test_unwrap_on_err_raises() -> None:
    with pytest.raises(RuntimeError, match="unwrap"):
        Err("boom").unwrap()
    with pytest.raises(RuntimeError, match="context: boom"):
        Err("boom").expect("context")
    with pytest.raises(RuntimeError):
        Ok(1).unwrap_err()


def test_map_err_and_or_else() -> None:
    assert Err("fail").map_err(str.upper) == Err("FAIL")
    assert Ok(1).map_err(str.upper) == Ok(1)
    assert Err("fail").or_else(lambda _: Ok(0)) == Ok(0)
    assert Ok(5).or_else(lambda _: Ok(0)) == Ok(5)


def test_and_then_alias() -> None:
    assert Ok(5).and_then(lambda x: Ok(x * 2)) == Ok(5).flat_map(lambda x: Ok(x * 2))
    assert Err("fail").and_then(lambda x: Ok(x)) == Err("fail")


def test_match() -> None:
    render = dict(ok=lambda sig: f"{len(sig.inputs)} inputs", err=lambda e: e.code)
    assert parse_shorthand("a, b -> c").match(**render) == "2 inputs"
    assert parse_shorthand("a b c").match(**render) is ErrorCode.MALFORMED_SIGNATURE


def test_dunders() -> None:
    assert bool(Ok(0)) is True
    assert bool(Err("x")) is False
    assert repr(Ok(1)) == "Ok(1)"
    assert repr(Err("x")) == "Err('x')"
    assert list(Ok(3)) == [3]
    assert list(Err("x")) == []
    assert Ok(1) != Err(1)
    assert hash(Ok(1)) == hash(Ok(1))


def test_sequence() -> None:
    assert sequence([Ok(1), Ok(2)]) == Ok([1, 2])
    assert sequence([Ok(1), Err("first"), Err("second")]) == Err("first")
    assert sequence([]) == Ok([])


def test_sequence_of_parses() -> None:
    """Collect several shorthand parses, failing on the first malformed one."""
    parsed = sequence([parse_shorthand(t) for t in ("a -> b", "c -> d")])
    assert [sig.output_names for sig in parsed.unwrap()] == [["b"], ["d"]]
    failed = sequence([parse_shorthand(t) for t in ("a -> b", "bad", "also bad")])
    assert isinstance(failed.unwrap_err(), SignatureError)

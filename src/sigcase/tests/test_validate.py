"""Tests for runtime validation against field descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated

import pytest
from pydantic import BaseModel

from sigcase.core import Tag, describe_fields, is_zero, validate
from sigcase.foundation.errors import ErrorCode


@dataclass
class Location:
    street: str = ""
    city: Annotated[str, Tag("city,required")] = ""


@dataclass
class Order:
    id: Annotated[str, Tag("id,required")] = ""
    ship_to: Annotated[Location | None, Tag("ship_to,required")] = None
    items: list[str] = field(default_factory=list)
    note: str = ""


@dataclass
class Batch:
    lines: Annotated[list[Location], Tag("lines,required")] = field(default_factory=list)


class Ticket(BaseModel):
    title: Annotated[str, Tag("title,required")] = ""
    priority: int = 0


ORDER = describe_fields(Order)


def test_valid_value_is_returned() -> None:
    order = Order(id="1", ship_to=Location(city="Paris"))
    result = validate(order, ORDER)
    assert result.is_ok()
    assert result.unwrap() is order


def test_none_is_empty_value() -> None:
    error = validate(None, ORDER).unwrap_err()
    assert error.code is ErrorCode.EMPTY_VALUE
    assert error.message == "input cannot be None"


def test_mapping_is_not_a_struct() -> None:
    error = validate({"id": "1"}, ORDER).unwrap_err()
    assert error.code is ErrorCode.NOT_A_STRUCT


def test_required_field_missing() -> None:
    error = validate(Order(), ORDER).unwrap_err()
    assert error.code is ErrorCode.REQUIRED_FIELD_MISSING
    assert error.message == "required field 'input.id' cannot be empty"
    assert error.path == "input.id"


def test_fails_fast_on_first_violation() -> None:
    """Both required fields are empty; only the first is reported."""
    assert validate(Order(), ORDER).unwrap_err().path == "input.id"


def test_custom_path() -> None:
    assert validate(Order(), ORDER, "output").unwrap_err().path == "output.id"


def test_required_object_none() -> None:
    error = validate(Order(id="1"), ORDER).unwrap_err()
    assert error.path == "input.ship_to"


def test_zero_record_counts_as_missing() -> None:
    """A record whose fields are all zero is itself zero."""
    error = validate(Order(id="1", ship_to=Location()), ORDER).unwrap_err()
    assert error.path == "input.ship_to"


def test_nested_required_field() -> None:
    error = validate(Order(id="1", ship_to=Location(street="Main St")), ORDER).unwrap_err()
    assert error.code is ErrorCode.REQUIRED_FIELD_MISSING
    assert error.path == "input.ship_to.city"
    assert error.message == "required field 'input.ship_to.city' cannot be empty"


@dataclass
class Country:
    name: str = ""
    code: Annotated[str, Tag("code,required")] = ""


@dataclass
class City:
    name: str = ""
    country: Annotated[Country, Tag("country,required")] = field(default_factory=Country)


@dataclass
class Trip:
    dest: Annotated[City, Tag("dest,required")] = field(default_factory=City)


def test_recursion_follows_each_required_level() -> None:
    fields = describe_fields(Trip)
    error = validate(Trip(dest=City(name="Lima", country=Country())), fields).unwrap_err()
    assert error.path == "input.dest.country"
    deep = validate(Trip(dest=City(name="Lima", country=Country(name="Peru"))), fields).unwrap_err()
    assert deep.path == "input.dest.country.code"
    assert validate(Trip(dest=City(name="Lima", country=Country(code="PE"))), fields).is_ok()


def test_optional_fields_may_be_empty() -> None:
    assert validate(Order(id="1", ship_to=Location(city="Oslo"), items=[], note=""), ORDER).is_ok()


def test_array_items_are_not_inspected() -> None:
    """Required arrays need elements; the elements themselves are not validated."""
    fields = describe_fields(Batch)
    assert validate(Batch(), fields).unwrap_err().path == "input.lines"
    assert validate(Batch(lines=[Location(street="no city")]), fields).is_ok()


def test_pydantic_model_value() -> None:
    fields = describe_fields(Ticket)
    assert validate(Ticket(), fields).unwrap_err().path == "input.title"
    assert validate(Ticket(title="Broken build"), fields).is_ok()


@pytest.mark.parametrize("value", [None, "", 0, 0.0, False, [], {}, (), set(), b"", Location()])
def test_zero_values(value: object) -> None:
    assert is_zero(value)


@pytest.mark.parametrize("value", ["a", 1, -1, 0.5, True, [0], {"k": None}, b"\x00", Location(city="x")])
def test_non_zero_values(value: object) -> None:
    assert not is_zero(value)

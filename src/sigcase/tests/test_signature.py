"""Tests for TypedSignature."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Annotated

import pytest
from pydantic import BaseModel, Field

from sigcase import TypedSignature, describe, reset_registry, shorthand
from sigcase.core import FieldType, Tag
from sigcase.foundation.errors import ErrorCode
from sigcase.registry import SignatureRegistry
from sigcase.schema import SchemaType


@dataclass
class Question:
    text: Annotated[str, Tag("question,required")] = ""


class Answer(BaseModel):
    answer: str = Field(default="", description="Final answer")
    confidence: Annotated[float, Tag("confidence,required")] = 0.0


@pytest.fixture(autouse=True)
def clean_registry() -> Iterator[None]:
    reset_registry()
    yield
    reset_registry()


def test_cached_shares_registry_metadata() -> None:
    first = TypedSignature.cached(Question, Answer)
    second = TypedSignature.cached(Question, Answer)
    assert first.metadata is second.metadata
    assert first.metadata is describe(Question, Answer)


def test_create_bypasses_registry() -> None:
    sig = TypedSignature.create(Question, Answer)
    assert sig.metadata is not describe(Question, Answer)
    assert [f.name for f in sig.metadata.outputs] == ["answer", "confidence"]


def test_cached_with_explicit_registry() -> None:
    registry = SignatureRegistry(shards=1)
    sig = TypedSignature.cached(Question, Answer, registry=registry)
    assert registry.get(Question, Answer) is sig.metadata
    assert len(registry) == 1
    assert sig.metadata is not describe(Question, Answer)


def test_bound_types() -> None:
    sig = TypedSignature.cached(Question, Answer)
    assert sig.input_type is Question
    assert sig.output_type is Answer


def test_validate_input() -> None:
    sig = TypedSignature.cached(Question, Answer)
    question = Question(text="Why is the sky blue?")
    assert sig.validate_input(question).unwrap() is question
    error = sig.validate_input(Question()).unwrap_err()
    assert error.code is ErrorCode.REQUIRED_FIELD_MISSING
    assert error.path == "input.question"


def test_validate_output() -> None:
    sig = TypedSignature.cached(Question, Answer)
    assert sig.validate_output(Answer(answer="Rayleigh scattering", confidence=0.9)).is_ok()
    assert sig.validate_output(Answer(answer="unsure")).unwrap_err().path == "output.confidence"
    assert sig.validate_output(None).unwrap_err().code is ErrorCode.EMPTY_VALUE


def test_with_instruction_leaves_cache_untouched() -> None:
    sig = TypedSignature.cached(Question, Answer)
    instructed = sig.with_instruction("Answer in one sentence")
    assert instructed.metadata.instruction == "Answer in one sentence"
    assert sig.metadata.instruction == ""
    assert describe(Question, Answer).instruction == ""
    assert instructed.input_type is Question


def test_to_legacy() -> None:
    legacy = TypedSignature.cached(Question, Answer).with_instruction("Be brief").to_legacy()
    assert legacy.input_names == ["question"]
    assert legacy.outputs[0].description == "Final answer"
    assert legacy.instruction == "Be brief"
    assert str(TypedSignature.cached(Question, Answer)).startswith("Inputs:\n  - question [string]")


def test_from_legacy() -> None:
    sig = TypedSignature.from_legacy(shorthand("question, context -> answer").with_instruction("hi"))
    assert sig.input_type is dict
    assert sig.output_type is dict
    assert [f.name for f in sig.metadata.inputs] == ["question", "context"]
    assert all(f.type is FieldType.TEXT and not f.required for f in sig.metadata.inputs)
    assert sig.metadata.instruction == "hi"


def test_schemas() -> None:
    sig = TypedSignature.cached(Question, Answer)
    input_schema = sig.input_schema()
    output_schema = sig.output_schema()
    assert input_schema.type is SchemaType.OBJECT
    assert input_schema.required == ["question"]
    assert output_schema.get_property("confidence").type is SchemaType.NUMBER
    assert output_schema.get_property("answer").description == "Final answer"

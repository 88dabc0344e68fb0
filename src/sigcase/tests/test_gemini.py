"""Tests for Gemini request helpers."""

from __future__ import annotations

from dataclasses import dataclass

from sigcase import TypedSignature
from sigcase.integrations import for_signature, generation_config, request_body
from sigcase.schema import SchemaNode, SchemaType


@dataclass
class Prompt:
    topic: str = ""


@dataclass
class Poem:
    title: str = ""
    lines: list[str] | None = None


def test_unset_values_are_omitted() -> None:
    assert generation_config() == {}
    assert generation_config(temperature=0.0) == {"temperature": 0.0}


def test_config_keys() -> None:
    config = generation_config(
        response_schema=SchemaNode(type=SchemaType.STRING),
        input_schema={"type": "OBJECT"},
        mime_type="application/json",
        temperature=0.7,
        max_output_tokens=256,
        top_p=0.9,
    )
    assert config == {
        "temperature": 0.7,
        "maxOutputTokens": 256,
        "topP": 0.9,
        "responseMimeType": "application/json",
        "parameters": {"type": "OBJECT"},
        "responseSchema": {"type": "STRING"},
    }


def test_for_signature() -> None:
    config = for_signature(TypedSignature.cached(Prompt, Poem), max_output_tokens=128)
    assert config["responseMimeType"] == "application/json"
    assert config["maxOutputTokens"] == 128
    assert config["parameters"]["properties"]["topic"] == {"type": "STRING"}
    assert config["responseSchema"]["properties"]["lines"]["type"] == "ARRAY"
    assert config["responseSchema"]["required"] == ["title", "lines"]


def test_for_signature_mime_override() -> None:
    config = for_signature(TypedSignature.cached(Prompt, Poem), mime_type="text/x.enum")
    assert config["responseMimeType"] == "text/x.enum"


def test_request_body() -> None:
    assert request_body("Hello") == {"contents": [{"parts": [{"text": "Hello"}]}]}
    body = request_body("Hello", {"temperature": 0.1})
    assert body["generationConfig"] == {"temperature": 0.1}

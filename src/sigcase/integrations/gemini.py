"""Gemini request helpers carrying synthesized schemas.

Builds the ``generationConfig`` and request-body dictionaries of the Gemini
``generateContent`` API. Unset values are omitted. No network I/O happens here.

Example:
    >>> sig = TypedSignature.cached(Question, Answer)
    >>> body = request_body("Why is the sky blue?", for_signature(sig, temperature=0.2))
    >>> body["generationConfig"]["responseMimeType"]
    'application/json'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sigcase.schema import SchemaNode

if TYPE_CHECKING:
    from sigcase.core.signature import TypedSignature

GenerationConfig = dict[str, Any]
RequestBody = dict[str, Any]

JSON_MIME_TYPE = "application/json"


def _document(schema: SchemaNode | dict[str, Any] | None) -> dict[str, Any] | None:
    if schema is None:
        return None
    return schema.to_document() if isinstance(schema, SchemaNode) else dict(schema)


def generation_config(
    *,
    input_schema: SchemaNode | dict[str, Any] | None = None,
    response_schema: SchemaNode | dict[str, Any] | None = None,
    mime_type: str | None = None,
    temperature: float | None = None,
    max_output_tokens: int | None = None,
    top_p: float | None = None,
) -> GenerationConfig:
    """Build a ``generationConfig`` mapping.
    
    Args:
        input_schema: Sent as ``parameters``
        response_schema: Sent as ``responseSchema``
        mime_type: Sent as ``responseMimeType``
        temperature: Sampling temperature
        max_output_tokens: Sent as ``maxOutputTokens``
        top_p: Sent as ``topP``
    """
    config: GenerationConfig = {
        "temperature": temperature,
        "maxOutputTokens": max_output_tokens,
        "topP": top_p,
        "responseMimeType": mime_type,
        "parameters": _document(input_schema),
        "responseSchema": _document(response_schema),
    }
    return {k: v for k, v in config.items() if v is not None}


def for_signature(sig: TypedSignature[Any, Any], **kwargs: Any) -> GenerationConfig:
    """``generationConfig`` with both schemas synthesized from a TypedSignature.
    
    ``responseMimeType`` defaults to JSON; remaining keyword arguments are passed
    to ``generation_config``.
    """
    kwargs.setdefault("mime_type", JSON_MIME_TYPE)
    return generation_config(
        input_schema=sig.input_schema(),
        response_schema=sig.output_schema(),
        **kwargs,
    )


def request_body(prompt: str, config: GenerationConfig | None = None) -> RequestBody:
    """Wrap a prompt into a single-turn ``generateContent`` body."""
    body: RequestBody = {"contents": [{"parts": [{"text": prompt}]}]}
    if config:
        body["generationConfig"] = config
    return body

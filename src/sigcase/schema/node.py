"""SchemaNode: the externally consumable schema document.

Mirrors the OpenAPI-subset schema accepted by model-calling APIs (Gemini
``responseSchema``). Field names serialize to their camelCase wire form and
unset or empty values are omitted.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Self

import orjson
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
    model_validator,
)


class SchemaType(StrEnum):
    """Type tag of a schema node."""
    STRING = "STRING"
    INTEGER = "INTEGER"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    OBJECT = "OBJECT"
    ARRAY = "ARRAY"


_EMPTY: tuple[object, ...] = (None, "", [], {})


class SchemaNode(BaseModel):
    """Recursive schema document node.
    
    Example:
        >>> node = SchemaNode(type=SchemaType.ARRAY, items=SchemaNode(type=SchemaType.STRING))
        >>> node.to_document()
        {'items': {'type': 'STRING'}, 'type': 'ARRAY'}
    """
    
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={"title": "Schema Node"},
    )
    
    any_of: list[SchemaNode] | None = Field(default=None, alias="anyOf")
    default: Any = None
    description: str | None = None
    enum: list[str] | None = None
    example: Any = None
    format: str | None = None
    items: SchemaNode | None = None
    max_items: int | None = Field(default=None, alias="maxItems")
    max_length: int | None = Field(default=None, alias="maxLength")
    max_properties: int | None = Field(default=None, alias="maxProperties")
    maximum: float | None = None
    min_items: int | None = Field(default=None, alias="minItems")
    min_length: int | None = Field(default=None, alias="minLength")
    min_properties: int | None = Field(default=None, alias="minProperties")
    minimum: float | None = None
    nullable: bool | None = None
    pattern: str | None = None
    properties: dict[str, SchemaNode] | None = None
    property_ordering: list[str] | None = Field(default=None, alias="propertyOrdering")
    required: list[str] | None = None
    title: str | None = None
    type: SchemaType | None = None
    
    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: object) -> object:
        """Accept lower-case type tags ("string") as well as the wire form."""
        return v.upper() if isinstance(v, str) else v
    
    @model_validator(mode="after")
    def _check_structure(self) -> Self:
        if self.items is not None and self.type not in (None, SchemaType.ARRAY):
            raise ValueError(f"'items' is only allowed on ARRAY nodes, not {self.type}")
        if self.properties is not None and self.type not in (None, SchemaType.OBJECT):
            raise ValueError(f"'properties' is only allowed on OBJECT nodes, not {self.type}")
        if self.required:
            missing = [name for name in self.required if name not in (self.properties or {})]
            if missing:
                raise ValueError(f"required names not in properties: {', '.join(missing)}")
        return self
    
    @model_serializer(mode="wrap")
    def _omit_empty(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return {k: v for k, v in handler(self).items() if v not in _EMPTY}
    
    # ─────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────
    
    def to_document(self) -> dict[str, Any]:
        """Wire form: camelCase keys, unset/empty values omitted."""
        return self.model_dump(mode="json", by_alias=True)
    
    def to_json(self) -> str:
        return orjson.dumps(self.to_document(), option=orjson.OPT_SORT_KEYS).decode()
    
    # ─────────────────────────────────────────────────────────────────
    # Navigation
    # ─────────────────────────────────────────────────────────────────
    
    def get_property(self, name: str) -> SchemaNode | None:
        return (self.properties or {}).get(name)
    
    def is_required(self, name: str) -> bool:
        return name in (self.required or ())


SchemaNode.model_rebuild()

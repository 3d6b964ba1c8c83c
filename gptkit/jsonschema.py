"""A small nested description of a JSON schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from gptkit.codec import JSONMarshaller


class DataType(str, Enum):
    OBJECT = "object"
    NUMBER = "number"
    INTEGER = "integer"
    STRING = "string"
    ARRAY = "array"
    NULL = "null"
    BOOLEAN = "boolean"


@dataclass
class Definition:
    """A JSON schema node; ``properties`` is always emitted, other empty fields are not."""

    type: Union[DataType, str, None] = None
    description: str = ""
    enum: list[str] | None = None
    properties: dict[str, Definition] | None = field(default_factory=dict)
    required: list[str] | None = None
    items: Definition | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.type:
            out["type"] = self.type.value if isinstance(self.type, DataType) else str(self.type)
        if self.description:
            out["description"] = self.description
        if self.enum:
            out["enum"] = list(self.enum)
        out["properties"] = {
            name: definition.to_dict() for name, definition in (self.properties or {}).items()
        }
        if self.required:
            out["required"] = list(self.required)
        if self.items is not None:
            out["items"] = self.items.to_dict()
        return out

    def to_json(self) -> str:
        return JSONMarshaller().marshal(self.to_dict()).decode("utf-8")
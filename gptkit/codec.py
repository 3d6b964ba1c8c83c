"""JSON encoding and decoding of request and response values."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

_ESCAPES = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


def to_jsonable(value: Any) -> Any:
    """Turn dataclasses, enums and objects with ``to_dict`` into plain JSON data."""
    if not isinstance(value, type):
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            return to_jsonable(to_dict())
    if isinstance(value, Enum):
        return to_jsonable(value.value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: to_jsonable(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    if isinstance(value, Mapping):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


class JSONMarshaller:
    """Encodes values as compact UTF-8 JSON with HTML-sensitive characters escaped."""

    def marshal(self, value: Any) -> bytes:
        text = json.dumps(to_jsonable(value), separators=(",", ":"), ensure_ascii=False)
        return text.translate(_ESCAPES).encode("utf-8")


class JSONUnmarshaler:
    """Decodes JSON documents into plain Python data."""

    def unmarshal(self, data: bytes | str) -> Any:
        return json.loads(data)
"""Description and construction of HTTP requests."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Union
from urllib.parse import urlencode

from gptkit.codec import JSONMarshaller

Body = Union[bytes, BinaryIO, None]

BETA_ASSISTANTS_V1 = {"OpenAI-Beta": "assistants=v1"}


def encode_query(params: Mapping[str, Any]) -> str:
    """Encode parameters sorted by key, leaving out those that are None."""
    pairs: list[tuple[str, str]] = []
    for key in sorted(params):
        value = params[key]
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        pairs.extend((key, str(item)) for item in values)
    return urlencode(pairs)


@dataclass
class HTTPRequest:
    """A request ready to send."""

    method: str
    url: str
    body: Body = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class ApiCall:
    """An endpoint call: where it goes, what it carries and how to read the reply."""

    method: str
    path: str
    body: Any = None
    query: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    model: str = ""
    parse: Callable[[Any], Any] | None = None

    def target(self) -> str:
        """The path with its encoded query string, if any."""
        query = encode_query(self.query)
        return f"{self.path}?{query}" if query else self.path


class RequestBuilder:
    """Builds requests, encoding non-binary bodies with a marshaller."""

    def __init__(self, marshaller: Any = None) -> None:
        self.marshaller = marshaller if marshaller is not None else JSONMarshaller()

    def build(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> HTTPRequest:
        payload: Body
        if body is None:
            payload = None
        elif isinstance(body, (bytes, bytearray)):
            payload = bytes(body)
        elif callable(getattr(body, "read", None)):
            payload = body
        else:
            payload = self.marshaller.marshal(body)
        return HTTPRequest(
            method=method or "GET",
            url=url,
            body=payload,
            headers=dict(headers) if headers is not None else {},
        )
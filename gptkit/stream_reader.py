"""Reader for server-sent event streams of JSON chunks."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar

from gptkit.accumulator import ErrorAccumulator
from gptkit.codec import JSONUnmarshaler

T = TypeVar("T")

_HEADER_DATA = b"data: "
_ERROR_PREFIX = b'data: {"error":'
DEFAULT_EMPTY_MESSAGES_LIMIT = 300


class TooManyEmptyStreamMessagesError(Exception):
    def __init__(self) -> None:
        super().__init__("stream has sent too many empty messages")


class StreamAPIError(Exception):
    """An error document sent by the server in place of stream data."""

    def __init__(
        self,
        message: str = "",
        error_type: str | None = None,
        param: Any = None,
        code: Any = None,
    ) -> None:
        super().__init__(f"error, {message}")
        self.message = message
        self.type = error_type
        self.param = param
        self.code = code


class StreamReader(Generic[T]):
    """Yields decoded ``data:`` events from raw lines, newline included, until ``[DONE]``.

    A final line without a newline is treated as the end of the stream.
    """

    def __init__(
        self,
        lines: Iterable[bytes],
        decode: Callable[[Any], T] | None = None,
        empty_messages_limit: int = DEFAULT_EMPTY_MESSAGES_LIMIT,
        accumulator: ErrorAccumulator | None = None,
        unmarshaler: Any = None,
    ) -> None:
        self._source = lines
        self._lines = iter(lines)
        self._decode = decode if decode is not None else (lambda obj: obj)
        self.empty_messages_limit = empty_messages_limit
        self.accumulator = accumulator if accumulator is not None else ErrorAccumulator()
        self._unmarshaler = unmarshaler if unmarshaler is not None else JSONUnmarshaler()
        self._finished = False

    def recv(self) -> T:
        """Return the next event; raise EOFError once the stream is over."""
        if self._finished:
            raise EOFError("stream finished")
        return self._process_lines()

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.recv()
            except EOFError:
                return

    def _read_line(self) -> bytes | None:
        try:
            line = next(self._lines)
        except StopIteration:
            return None
        if isinstance(line, str):
            line = line.encode("utf-8")
        return line if line.endswith(b"\n") else None

    def _process_lines(self) -> T:
        empty_messages = 0
        has_error_prefix = False
        while True:
            raw = self._read_line()
            if raw is None or has_error_prefix:
                api_error = self._unmarshal_error()
                if api_error is not None:
                    raise api_error
                if raw is None:
                    raise EOFError("stream ended")
                raise StreamAPIError(self.accumulator.value().decode("utf-8", "replace"))

            line = raw.strip()
            if line.startswith(_ERROR_PREFIX):
                has_error_prefix = True
            if not line.startswith(_HEADER_DATA) or has_error_prefix:
                if has_error_prefix:
                    line = line.removeprefix(_HEADER_DATA)
                self.accumulator.write(line)
                empty_messages += 1
                if empty_messages > self.empty_messages_limit:
                    raise TooManyEmptyStreamMessagesError()
                continue

            payload = line.removeprefix(_HEADER_DATA)
            if payload == b"[DONE]":
                self._finished = True
                raise EOFError("stream finished")
            return self._decode(self._unmarshaler.unmarshal(payload))

    def _unmarshal_error(self) -> StreamAPIError | None:
        data = self.accumulator.value()
        if not data:
            return None
        try:
            parsed = self._unmarshaler.unmarshal(data)
        except ValueError:
            return None
        if not isinstance(parsed, dict):
            return None
        error = parsed.get("error")
        if not isinstance(error, dict):
            return StreamAPIError()
        message = error.get("message") or ""
        if isinstance(message, list):
            message = "\n".join(str(item) for item in message)
        return StreamAPIError(
            message=str(message),
            error_type=error.get("type"),
            param=error.get("param"),
            code=error.get("code"),
        )

    def close(self) -> None:
        """Close the underlying source if it can be closed."""
        close = getattr(self._source, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> StreamReader[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
"""Collects stray stream bytes that may make up an error document."""

from __future__ import annotations

import io
from typing import Protocol


class AccumulatorWriteError(Exception):
    """Raised when the underlying buffer refuses a write."""


class _Buffer(Protocol):
    def write(self, data: bytes) -> int: ...

    def getvalue(self) -> bytes: ...


class ErrorAccumulator:
    """Appends raw bytes to a buffer so they can be parsed as an error later."""

    def __init__(self, buffer: _Buffer | None = None) -> None:
        self.buffer: _Buffer = buffer if buffer is not None else io.BytesIO()

    def write(self, data: bytes) -> None:
        """Append ``data`` to the buffer."""
        try:
            self.buffer.write(data)
        except (OSError, ValueError) as exc:
            raise AccumulatorWriteError(f"error accumulator write error, {exc}") from exc

    def value(self) -> bytes:
        """Return everything written so far (empty bytes if nothing was)."""
        return bytes(self.buffer.getvalue())
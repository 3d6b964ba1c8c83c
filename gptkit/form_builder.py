"""Writes multipart/form-data bodies."""

from __future__ import annotations

import os
import secrets
from typing import BinaryIO

_CHUNK = 64 * 1024


def _escape_quotes(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _base_name(path: str) -> str:
    """Last element of a slash-separated path, '.' for empty and '/' for all slashes."""
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


class FormBuilder:
    """Streams form fields and files into ``body`` as multipart parts."""

    def __init__(self, body: BinaryIO) -> None:
        self._body = body
        self.boundary = secrets.token_hex(30)
        self._parts = 0

    def create_form_file(self, fieldname: str, file: BinaryIO) -> None:
        """Add an open file as a part, named after the file's own name."""
        name = getattr(file, "name", "")
        if isinstance(name, bytes):
            name = os.fsdecode(name)
        elif not isinstance(name, str):
            name = ""
        self._create_form_file(fieldname, file, name)

    def create_form_file_reader(self, fieldname: str, reader: BinaryIO, filename: str) -> None:
        """Add the contents of ``reader`` as a file part called by the base of ``filename``."""
        self._create_form_file(fieldname, reader, _base_name(filename))

    def _create_form_file(self, fieldname: str, reader: BinaryIO, filename: str) -> None:
        if not filename:
            raise ValueError("filename cannot be empty")
        self._start_part(
            f'form-data; name="{_escape_quotes(fieldname)}"; '
            f'filename="{_escape_quotes(filename)}"',
            "application/octet-stream",
        )
        while chunk := reader.read(_CHUNK):
            self._body.write(chunk if isinstance(chunk, bytes) else chunk.encode("utf-8"))

    def write_field(self, fieldname: str, value: str) -> None:
        """Add a plain text field."""
        self._start_part(f'form-data; name="{_escape_quotes(fieldname)}"')
        self._body.write(value.encode("utf-8"))

    def _start_part(self, disposition: str, content_type: str | None = None) -> None:
        opening = "\r\n--" if self._parts else "--"
        lines = [f"{opening}{self.boundary}\r\n", f"Content-Disposition: {disposition}\r\n"]
        if content_type is not None:
            lines.append(f"Content-Type: {content_type}\r\n")
        lines.append("\r\n")
        self._body.write("".join(lines).encode("utf-8"))
        self._parts += 1

    def close(self) -> None:
        """Write the closing boundary."""
        self._body.write(f"\r\n--{self.boundary}--\r\n".encode("ascii"))

    def content_type(self) -> str:
        """The Content-Type header value for this body."""
        return f"multipart/form-data; boundary={self.boundary}"
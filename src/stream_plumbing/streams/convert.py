from __future__ import annotations

import io

from stream_plumbing.ports.source import Source
from stream_plumbing.streams._io import (
    DEFAULT_BUFFER_SIZE,
    decode_bytes,
    encode_text,
    is_bytes_like,
)
from stream_plumbing.streams.transfer import copy

# Materializing helpers read the whole source into memory; size is bounded only by the interpreter.


def to_byte_array(
    source: Source | str | bytes,
    encoding: str | None = None,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> bytes:
    # Character sources and plain strings are encoded with `encoding`.
    if isinstance(source, str):
        return encode_text(source, encoding)
    if is_bytes_like(source):
        return bytes(source)  # type: ignore[arg-type]
    sink = io.BytesIO()
    copy(source, sink, encoding, buffer_size=buffer_size)
    return sink.getvalue()


def to_string(
    source: Source | bytes | str,
    encoding: str | None = None,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    errors: str = "strict",
) -> str:
    # Bytes-like values and byte sources are decoded; character sources are read as-is.
    if isinstance(source, str):
        return source
    if is_bytes_like(source):
        return decode_bytes(source, encoding, errors)  # type: ignore[arg-type]
    # newline="" keeps \r and \r\n exactly as read.
    sink = io.StringIO(newline="")
    copy(source, sink, encoding, buffer_size=buffer_size, errors=errors)
    return sink.getvalue()


def to_char_array(
    source: Source | bytes | str,
    encoding: str | None = None,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> list[str]:
    return list(to_string(source, encoding, buffer_size=buffer_size))


def to_input_source(text: str, encoding: str | None = None) -> io.BytesIO:
    # Wrap a string as a readable byte source.
    return io.BytesIO(encode_text(text, encoding))


def to_char_source(text: str) -> io.StringIO:
    return io.StringIO(text, newline="")

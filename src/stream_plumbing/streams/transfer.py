from __future__ import annotations

from stream_plumbing.ports.sink import Sink
from stream_plumbing.ports.source import Source
from stream_plumbing.streams._io import (
    DEFAULT_BUFFER_SIZE,
    Transcoder,
    check_buffer_size,
    check_errors,
    is_text_sink,
    read_chunk,
    resolve_encoding,
    write_all,
)


def copy(
    source: Source,
    sink: Sink,
    encoding: str | None = None,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    errors: str = "strict",
) -> int:
    """Copy everything left in source to sink and return the number of units written.

    Bytes are decoded when the sink takes characters and characters are encoded
    when the sink takes bytes, both with ``encoding`` (UTF-8 when omitted).
    Data already written is not rolled back when a later read or write fails.
    """
    return copy_large(source, sink, encoding, buffer_size=buffer_size, errors=errors)


def copy_large(
    source: Source,
    sink: Sink,
    encoding: str | None = None,
    *,
    offset: int = 0,
    length: int = -1,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    errors: str = "strict",
) -> int:
    """Skip ``offset`` source units, then copy at most ``length`` units (-1 copies all)."""
    if offset < 0:
        raise ValueError("offset must be >= 0")
    if length < -1:
        raise ValueError("length must be >= 0, or -1 to copy everything")
    check_buffer_size(buffer_size)
    transcoder = Transcoder(
        text_sink=is_text_sink(sink),
        encoding=resolve_encoding(encoding),
        errors=check_errors(errors),
    )

    skip(source, offset, buffer_size=buffer_size)
    written = 0
    remaining = length
    while remaining != 0:
        size = buffer_size if remaining < 0 else min(buffer_size, remaining)
        chunk = read_chunk(source, size)
        if not chunk:
            break
        if remaining > 0:
            remaining -= len(chunk)
        written += write_all(sink, transcoder.feed(chunk))
    written += write_all(sink, transcoder.finish())
    return written


def skip(source: Source, count: int, *, buffer_size: int = DEFAULT_BUFFER_SIZE) -> int:
    # Sources are not assumed seekable, so skipping reads and discards; returns units skipped.
    skipped = 0
    while skipped < count:
        chunk = read_chunk(source, min(buffer_size, count - skipped))
        if not chunk:
            break
        skipped += len(chunk)
    return skipped

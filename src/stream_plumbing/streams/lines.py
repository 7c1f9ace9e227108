from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from types import TracebackType
from typing import cast

from stream_plumbing.ports.source import Source
from stream_plumbing.streams._io import (
    DEFAULT_BUFFER_SIZE,
    Transcoder,
    check_buffer_size,
    check_errors,
    guarded,
    read_chunk,
    resolve_encoding,
)

# \n, \r and \r\n each end exactly one line, independent of the platform.
_TERMINATOR = re.compile(r"[\r\n]")


class LineIterator:
    """Forward-only, single-pass sequence of lines read lazily from a source.

    Byte sources are decoded incrementally with ``encoding``; character sources
    are used as-is. Lines never include their terminator, and a source ending
    with a terminator yields no trailing empty line. The only way to restart is
    to open a new source.
    """

    def __init__(
        self,
        source: Source,
        encoding: str | None = None,
        *,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        errors: str = "strict",
    ) -> None:
        if source is None:
            raise ValueError("source must not be None")
        self._source = source
        self._buffer_size = check_buffer_size(buffer_size)
        self._transcoder = Transcoder(
            text_sink=True,
            encoding=resolve_encoding(encoding),
            errors=check_errors(errors),
        )
        self._lines = split_lines(self._text_chunks())
        self._peeked: str | None = None
        self._finished = False
        self._closed = False

    def __iter__(self) -> LineIterator:
        return self

    def __next__(self) -> str:
        if self._peeked is not None:
            line, self._peeked = self._peeked, None
            return line
        if self._finished:
            raise StopIteration
        try:
            return next(self._lines)
        except StopIteration:
            self._finished = True
            raise

    def has_next(self) -> bool:
        if self._peeked is not None:
            return True
        if self._finished:
            return False
        try:
            self._peeked = next(self._lines)
        except StopIteration:
            self._finished = True
            return False
        return True

    def next_line(self) -> str:
        return next(self)

    def close(self) -> None:
        # Closing ends iteration and releases the underlying source; repeated calls are no-ops.
        self._finished = True
        self._peeked = None
        if self._closed:
            return
        self._closed = True
        self._lines.close()
        close = getattr(self._source, "close", None)
        if close is not None:
            with guarded("close"):
                close()

    def __enter__(self) -> LineIterator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _text_chunks(self) -> Iterator[str]:
        while True:
            chunk = read_chunk(self._source, self._buffer_size)
            if not chunk:
                break
            # A transcoder built with text_sink=True always produces str.
            yield cast(str, self._transcoder.feed(chunk))
        tail = cast(str, self._transcoder.finish())
        if tail:
            yield tail


def split_lines(chunks: Iterable[str]) -> Iterator[str]:
    # A \r at the end of one chunk may pair with a \n at the start of the next.
    pending: list[str] = []
    skip_lf = False
    for chunk in chunks:
        if not chunk:
            continue
        pos = 0
        if skip_lf:
            skip_lf = False
            if chunk[0] == "\n":
                pos = 1
        size = len(chunk)
        while pos < size:
            match = _TERMINATOR.search(chunk, pos)
            if match is None:
                pending.append(chunk[pos:])
                break
            end = match.start()
            pending.append(chunk[pos:end])
            yield "".join(pending)
            pending = []
            pos = end + 1
            if chunk[end] == "\r":
                if pos == size:
                    skip_lf = True
                elif chunk[pos] == "\n":
                    pos += 1
    if pending:
        yield "".join(pending)


def to_lines(
    source: Source,
    encoding: str | None = None,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    errors: str = "strict",
) -> LineIterator:
    return LineIterator(source, encoding, buffer_size=buffer_size, errors=errors)


def read_lines(
    source: Source,
    encoding: str | None = None,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    errors: str = "strict",
) -> list[str]:
    # Materializes every line; the source stays open (caller owns it).
    return list(LineIterator(source, encoding, buffer_size=buffer_size, errors=errors))

from __future__ import annotations

from itertools import zip_longest

from stream_plumbing.ports.source import Source
from stream_plumbing.streams._io import DEFAULT_BUFFER_SIZE, check_buffer_size, read_chunk
from stream_plumbing.streams.lines import LineIterator

_MISSING = object()


def content_equals(
    first: Source | None,
    second: Source | None,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> bool:
    """Return True iff both sources hold exactly the same units in the same order.

    No normalization happens: texts that differ only in line terminators are
    not equal. Both sources are read to the first difference and left open.
    """
    if first is second:
        return True
    if first is None or second is None:
        return False
    check_buffer_size(buffer_size)

    # Reads may return chunks of different sizes, so unmatched tails carry over.
    left: bytes | str = b""
    right: bytes | str = b""
    # Each side's kind is fixed by its first read, even an empty one.
    left_text: bool | None = None
    right_text: bool | None = None
    while True:
        if not left:
            left = read_chunk(first, buffer_size)
            if left_text is None:
                left_text = isinstance(left, str)
        if not right:
            right = read_chunk(second, buffer_size)
            if right_text is None:
                right_text = isinstance(right, str)
        if left_text != right_text:
            raise TypeError("Cannot compare a byte source with a character source")
        if not left or not right:
            return not left and not right
        size = min(len(left), len(right))
        if left[:size] != right[:size]:
            return False
        left = left[size:]
        right = right[size:]


def content_equals_ignore_eol(
    first: Source | None,
    second: Source | None,
    encoding: str | None = None,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    errors: str = "strict",
) -> bool:
    # Logical comparison: line sequences must match, terminator style is ignored.
    if first is second:
        return True
    if first is None or second is None:
        return False
    left = LineIterator(first, encoding, buffer_size=buffer_size, errors=errors)
    right = LineIterator(second, encoding, buffer_size=buffer_size, errors=errors)
    for a, b in zip_longest(left, right, fillvalue=_MISSING):
        if a != b:
            return False
    return True

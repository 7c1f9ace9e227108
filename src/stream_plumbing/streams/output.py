from __future__ import annotations

from collections.abc import Iterable

from stream_plumbing.ports.sink import Sink
from stream_plumbing.streams._io import (
    DEFAULT_LINE_ENDING,
    decode_bytes,
    encode_text,
    is_text_sink,
    write_all,
)


def write(data: bytes | str | None, sink: Sink, encoding: str | None = None) -> int:
    # Converts between bytes and characters to match the sink; None writes nothing.
    if data is None:
        return 0
    text_sink = is_text_sink(sink)
    if isinstance(data, str):
        payload: bytes | str = data if text_sink else encode_text(data, encoding)
    else:
        payload = decode_bytes(bytes(data), encoding) if text_sink else bytes(data)
    return write_all(sink, payload)


def write_lines(
    lines: Iterable[object] | None,
    sink: Sink,
    line_ending: str | None = None,
    encoding: str | None = None,
) -> int:
    # Every line is followed by line_ending ("\n" unless given); None items become empty lines.
    if lines is None:
        return 0
    ending = DEFAULT_LINE_ENDING if line_ending is None else line_ending
    written = 0
    for line in lines:
        text = "" if line is None else str(line)
        written += write(text + ending, sink, encoding)
    return written

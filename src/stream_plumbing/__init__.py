"""Streaming I/O plumbing: copy, compare, split into lines, convert and quietly close streams."""

from stream_plumbing.domain.errors import EncodingFailure, IOFailure, StreamError
from stream_plumbing.streams import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_ENCODING,
    DEFAULT_LINE_ENDING,
    LineIterator,
    close_quietly,
    content_equals,
    content_equals_ignore_eol,
    copy,
    copy_large,
    read_lines,
    to_byte_array,
    to_char_array,
    to_char_source,
    to_input_source,
    to_lines,
    to_string,
    write,
    write_lines,
)
from stream_plumbing.util import StreamUtil

__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "DEFAULT_ENCODING",
    "DEFAULT_LINE_ENDING",
    "EncodingFailure",
    "IOFailure",
    "LineIterator",
    "StreamError",
    "StreamUtil",
    "close_quietly",
    "content_equals",
    "content_equals_ignore_eol",
    "copy",
    "copy_large",
    "read_lines",
    "to_byte_array",
    "to_char_array",
    "to_char_source",
    "to_input_source",
    "to_lines",
    "to_string",
    "write",
    "write_lines",
]

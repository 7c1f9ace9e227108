from ._io import DEFAULT_BUFFER_SIZE, DEFAULT_ENCODING, DEFAULT_LINE_ENDING
from .release import close_quietly
from .compare import content_equals, content_equals_ignore_eol
from .convert import to_byte_array, to_char_array, to_char_source, to_input_source, to_string
from .transfer import copy, copy_large, skip
from .lines import LineIterator, read_lines, split_lines, to_lines
from .output import write, write_lines

__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "DEFAULT_ENCODING",
    "DEFAULT_LINE_ENDING",
    "LineIterator",
    "close_quietly",
    "content_equals",
    "content_equals_ignore_eol",
    "copy",
    "copy_large",
    "read_lines",
    "skip",
    "split_lines",
    "to_byte_array",
    "to_char_array",
    "to_char_source",
    "to_input_source",
    "to_lines",
    "to_string",
    "write",
    "write_lines",
]

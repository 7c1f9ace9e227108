from __future__ import annotations

import codecs
import io
from collections.abc import Iterator
from contextlib import contextmanager

from stream_plumbing.domain.errors import EncodingFailure, IOFailure, StreamError
from stream_plumbing.ports.sink import Sink
from stream_plumbing.ports.source import Source

# Explicit defaults: nothing depends on the platform locale or os.linesep.
DEFAULT_ENCODING = "utf-8"
DEFAULT_BUFFER_SIZE = 4096
DEFAULT_LINE_ENDING = "\n"

_BYTES_LIKE = (bytes, bytearray, memoryview)
_DECODE_ERROR_POLICIES = {"strict", "replace"}


@contextmanager
def guarded(operation: str) -> Iterator[None]:
    # Map low-level failures to the domain error kinds; domain errors pass through untouched.
    try:
        yield
    except StreamError:
        raise
    except (UnicodeError, LookupError) as exc:
        raise EncodingFailure(f"{operation} failed: {exc}") from exc
    except (OSError, ValueError) as exc:
        # ValueError covers operations on already closed io streams.
        raise IOFailure(f"{operation} failed: {exc}") from exc


def resolve_encoding(encoding: str | None) -> str:
    name = DEFAULT_ENCODING if encoding is None else encoding
    if not isinstance(name, str) or not name:
        raise EncodingFailure("encoding must be a non-empty string")
    try:
        return codecs.lookup(name).name
    except LookupError as exc:
        raise EncodingFailure(f"Unsupported encoding: {name!r}") from exc


def check_errors(errors: str) -> str:
    if errors not in _DECODE_ERROR_POLICIES:
        raise ValueError(f"errors must be one of: {sorted(_DECODE_ERROR_POLICIES)}")
    return errors


def check_buffer_size(buffer_size: int) -> int:
    if not isinstance(buffer_size, int) or buffer_size <= 0:
        raise ValueError("buffer_size must be a positive integer")
    return buffer_size


def is_bytes_like(value: object) -> bool:
    return isinstance(value, _BYTES_LIKE)


def is_text_sink(sink: Sink) -> bool:
    # Character sinks are TextIOBase streams or file-like objects exposing a text encoding.
    if isinstance(sink, io.TextIOBase):
        return True
    if isinstance(sink, (io.RawIOBase, io.BufferedIOBase)):
        return False
    mode = getattr(sink, "mode", None)
    if isinstance(mode, str) and mode:
        return "b" not in mode
    return isinstance(getattr(sink, "encoding", None), str)


def read_chunk(source: Source, size: int) -> bytes | str:
    # Empty result marks the end of the source; None means a non-blocking stream had no data yet.
    with guarded("read"):
        chunk = source.read(size)
    if chunk is None:
        raise IOFailure("read failed: source returned None (non-blocking stream)")
    if isinstance(chunk, str):
        return chunk
    if isinstance(chunk, _BYTES_LIKE):
        return bytes(chunk)
    raise TypeError(f"Source returned unsupported type: {type(chunk).__name__}")


def write_all(sink: Sink, data: bytes | str) -> int:
    if not data:
        return 0
    view: bytes | str | memoryview = data
    while True:
        with guarded("write"):
            written = sink.write(view)
        # Raw byte sinks may accept a partial write; loop until everything is out.
        if isinstance(view, str) or not isinstance(written, int) or written >= len(view):
            return len(data)
        if written <= 0:
            raise IOFailure("write failed: sink accepted no data")
        view = memoryview(view)[written:]


def encode_text(text: str, encoding: str | None, errors: str = "strict") -> bytes:
    codec = resolve_encoding(encoding)
    with guarded("encode"):
        return text.encode(codec, errors)


def decode_bytes(data: bytes, encoding: str | None, errors: str = "strict") -> str:
    codec = resolve_encoding(encoding)
    policy = check_errors(errors)
    with guarded("decode"):
        return bytes(data).decode(codec, policy)


class Transcoder:
    # Incremental conversion between the source kind and the sink kind, fixed by the first chunk.
    def __init__(self, *, text_sink: bool, encoding: str, errors: str = "strict") -> None:
        self._text_sink = text_sink
        self._encoding = encoding
        self._errors = errors
        self._decoder: codecs.IncrementalDecoder | None = None
        self._encoder: codecs.IncrementalEncoder | None = None

    def feed(self, chunk: bytes | str) -> bytes | str:
        if isinstance(chunk, str):
            if self._text_sink:
                return chunk
            with guarded("encode"):
                return self._encoder_for().encode(chunk)
        if not self._text_sink:
            return chunk
        with guarded("decode"):
            return self._decoder_for().decode(chunk)

    def finish(self) -> bytes | str:
        # Flush codec state; a truncated multi-byte sequence fails here under strict errors.
        if self._decoder is not None:
            with guarded("decode"):
                return self._decoder.decode(b"", final=True)
        if self._encoder is not None:
            with guarded("encode"):
                return self._encoder.encode("", final=True)
        return ""

    def _decoder_for(self) -> codecs.IncrementalDecoder:
        if self._decoder is None:
            with guarded("decode"):
                self._decoder = codecs.getincrementaldecoder(self._encoding)(self._errors)
        return self._decoder

    def _encoder_for(self) -> codecs.IncrementalEncoder:
        if self._encoder is None:
            with guarded("encode"):
                self._encoder = codecs.getincrementalencoder(self._encoding)("strict")
        return self._encoder

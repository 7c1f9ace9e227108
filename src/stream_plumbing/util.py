from __future__ import annotations

import io
from collections.abc import Iterable
from dataclasses import dataclass, field

from stream_plumbing import streams
from stream_plumbing.config.models import IOSettings
from stream_plumbing.ports.closeable import Closeable
from stream_plumbing.ports.log_sink import LogSink
from stream_plumbing.ports.sink import Sink
from stream_plumbing.ports.source import Source


@dataclass(frozen=True, slots=True)
class StreamUtil:
    """Stream operations bound to one set of defaults.

    Every method delegates to the matching function in ``stream_plumbing.streams``
    and fills in encoding, buffer size, line ending and decode policy from
    ``settings``. Explicit ``encoding`` arguments still win.
    """

    settings: IOSettings = field(default_factory=IOSettings)
    log_sink: LogSink | None = None

    def copy(self, source: Source, sink: Sink, encoding: str | None = None) -> int:
        return streams.copy(
            source,
            sink,
            self._encoding(encoding),
            buffer_size=self.settings.buffer_size,
            errors=self.settings.decode_errors,
        )

    def copy_large(
        self,
        source: Source,
        sink: Sink,
        encoding: str | None = None,
        *,
        offset: int = 0,
        length: int = -1,
    ) -> int:
        return streams.copy_large(
            source,
            sink,
            self._encoding(encoding),
            offset=offset,
            length=length,
            buffer_size=self.settings.buffer_size,
            errors=self.settings.decode_errors,
        )

    def content_equals(self, first: Source | None, second: Source | None) -> bool:
        return streams.content_equals(first, second, buffer_size=self.settings.buffer_size)

    def content_equals_ignore_eol(
        self, first: Source | None, second: Source | None, encoding: str | None = None
    ) -> bool:
        return streams.content_equals_ignore_eol(
            first,
            second,
            self._encoding(encoding),
            buffer_size=self.settings.buffer_size,
            errors=self.settings.decode_errors,
        )

    def to_lines(self, source: Source, encoding: str | None = None) -> streams.LineIterator:
        return streams.to_lines(
            source,
            self._encoding(encoding),
            buffer_size=self.settings.buffer_size,
            errors=self.settings.decode_errors,
        )

    def read_lines(self, source: Source, encoding: str | None = None) -> list[str]:
        return list(self.to_lines(source, encoding))

    def to_byte_array(self, source: Source | str | bytes, encoding: str | None = None) -> bytes:
        return streams.to_byte_array(
            source, self._encoding(encoding), buffer_size=self.settings.buffer_size
        )

    def to_char_array(self, source: Source | bytes | str, encoding: str | None = None) -> list[str]:
        return list(self.to_string(source, encoding))

    def to_string(self, source: Source | bytes | str, encoding: str | None = None) -> str:
        return streams.to_string(
            source,
            self._encoding(encoding),
            buffer_size=self.settings.buffer_size,
            errors=self.settings.decode_errors,
        )

    def to_input_source(self, text: str, encoding: str | None = None) -> io.BytesIO:
        return streams.to_input_source(text, self._encoding(encoding))

    def write(self, data: bytes | str | None, sink: Sink, encoding: str | None = None) -> int:
        return streams.write(data, sink, self._encoding(encoding))

    def write_lines(
        self,
        lines: Iterable[object] | None,
        sink: Sink,
        line_ending: str | None = None,
        encoding: str | None = None,
    ) -> int:
        ending = self.settings.line_ending if line_ending is None else line_ending
        return streams.write_lines(lines, sink, ending, self._encoding(encoding))

    def close_quietly(self, *resources: Closeable | None) -> None:
        streams.close_quietly(*resources, log_sink=self.log_sink)

    def _encoding(self, encoding: str | None) -> str:
        return self.settings.encoding if encoding is None else encoding

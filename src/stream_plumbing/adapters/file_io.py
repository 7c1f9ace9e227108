from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, TextIO

from stream_plumbing.domain.errors import IOFailure
from stream_plumbing.streams._io import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_ENCODING,
    DEFAULT_LINE_ENDING,
    guarded,
)
from stream_plumbing.streams.lines import LineIterator
from stream_plumbing.streams.output import write_lines
from stream_plumbing.streams.release import close_quietly


def open_source(path: Path) -> BinaryIO:
    # Binary handle so decoding and terminator handling stay with the stream utilities.
    try:
        return path.open("rb")
    except OSError as exc:
        raise IOFailure(f"Cannot open {path}: {exc}") from exc


@dataclass(frozen=True, slots=True)
class FileLineSource:
    # File source adapter: yields decoded lines in physical order, any terminator style.
    path: Path
    encoding: str = DEFAULT_ENCODING
    buffer_size: int = DEFAULT_BUFFER_SIZE
    errors: str = "strict"

    def read(self) -> Iterator[str]:
        handle = open_source(self.path)
        try:
            lines = LineIterator(handle, self.encoding, buffer_size=self.buffer_size, errors=self.errors)
        except Exception:
            close_quietly(handle)
            raise
        with lines:
            yield from lines


@dataclass
class FileOutputSink:
    # File sink adapter: writes terminated lines, optionally via temp file + atomic replace.
    path: Path
    encoding: str = DEFAULT_ENCODING
    line_ending: str = DEFAULT_LINE_ENDING
    atomic_replace: bool = False
    _handle: TextIO | None = field(default=None, init=False, repr=False)
    _temp_path: Path | None = field(default=None, init=False, repr=False)

    def write_line(self, line: str) -> None:
        self.write_lines([line])

    def write_lines(self, lines: Iterable[object]) -> int:
        # Open lazily so construction itself does not touch the filesystem.
        handle = self._handle if self._handle is not None else self._open()
        return write_lines(lines, handle, self.line_ending, self.encoding)

    def close(self) -> None:
        # Close is idempotent to simplify shutdown paths.
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        with guarded("close"):
            handle.flush()
            handle.close()
            if self.atomic_replace and self._temp_path is not None:
                self._temp_path.replace(self.path)
                self._temp_path = None

    def _open(self) -> TextIO:
        # newline="" writes line endings exactly as given.
        target = self.path
        if self.atomic_replace:
            self._temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            target = self._temp_path
        try:
            self._handle = target.open("w", encoding=self.encoding, newline="")
        except OSError as exc:
            raise IOFailure(f"Cannot open {target}: {exc}") from exc
        return self._handle


def open_target(path: Path) -> BinaryIO:
    try:
        return path.open("wb")
    except OSError as exc:
        raise IOFailure(f"Cannot open {path}: {exc}") from exc

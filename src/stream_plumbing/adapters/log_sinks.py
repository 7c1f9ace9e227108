from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TextIO

from stream_plumbing.config.models import LoggingSettings
from stream_plumbing.domain.logging import LogMessage, level_enabled


class StdoutLogSink:
    # Compact JSON per message on stdout (or any text stream supplied for tests).
    def __init__(self, level: str = "DEBUG", stream: TextIO | None = None) -> None:
        self._level = level
        self._stream = stream

    def emit(self, message: LogMessage) -> None:
        if not level_enabled(message.level, self._level):
            return
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(_encode(message) + "\n")

    def close(self) -> None:
        # stdout is not owned by the sink; nothing to release.
        pass


class JsonlLogSink:
    # File-backed structured log sink; appends one JSON object per line.
    def __init__(self, path: Path, level: str = "DEBUG") -> None:
        self._path = path
        self._level = level
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file: TextIO | None = self._path.open("a", encoding="utf-8")

    def emit(self, message: LogMessage) -> None:
        if self._file is None or not level_enabled(message.level, self._level):
            return
        self._file.write(_encode(message) + "\n")
        self._file.flush()

    def close(self) -> None:
        # Close is idempotent so it can sit in any shutdown path.
        if self._file is None:
            return
        self._file.close()
        self._file = None


def build_log_sink(settings: LoggingSettings) -> StdoutLogSink | JsonlLogSink | None:
    # Maps logging settings to a concrete sink; "none" disables reporting.
    if settings.sink == "stdout":
        return StdoutLogSink(level=settings.level)
    if settings.sink == "jsonl":
        if settings.path is None:
            raise ValueError("logging.path is required when logging.sink is jsonl")
        return JsonlLogSink(Path(settings.path), level=settings.level)
    return None


def _encode(message: LogMessage) -> str:
    return json.dumps(_log_to_dict(message), separators=(",", ":"), ensure_ascii=False, default=str)


def _log_to_dict(message: LogMessage) -> dict[str, object]:
    return {
        "level": message.level,
        "message": message.message,
        "timestamp": message.timestamp.isoformat().replace("+00:00", "Z"),
        "fields": message.fields,
    }

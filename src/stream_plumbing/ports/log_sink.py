from __future__ import annotations

from typing import Protocol, runtime_checkable

from stream_plumbing.domain.logging import LogMessage


# LogSink port receives structured log messages (see adapters.log_sinks).
@runtime_checkable
class LogSink(Protocol):
    def emit(self, message: LogMessage) -> None:
        """Emit a single structured log message."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("LogSink is a port; use a concrete adapter.")

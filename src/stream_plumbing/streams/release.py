from __future__ import annotations

from stream_plumbing.domain.logging import LogMessage
from stream_plumbing.ports.closeable import Closeable
from stream_plumbing.ports.log_sink import LogSink


def close_quietly(*resources: Closeable | None, log_sink: LogSink | None = None) -> None:
    """Release each resource, never raising.

    ``None`` entries are skipped and already closed resources are fine. A
    failing ``close()`` is discarded, optionally after reporting it to
    ``log_sink`` at DEBUG level. Safe to call from any cleanup path, including
    ones already handling an error.
    """
    for resource in resources:
        if resource is None:
            continue
        try:
            resource.close()
        except Exception as exc:
            if log_sink is not None:
                _report(log_sink, resource, exc)


def _report(log_sink: LogSink, resource: object, exc: Exception) -> None:
    try:
        log_sink.emit(
            LogMessage(
                level="DEBUG",
                message="close failed; ignored",
                fields={"resource": type(resource).__name__, "error": repr(exc)},
            )
        )
    except Exception:
        # Reporting failures are dropped too; close_quietly must not raise.
        pass

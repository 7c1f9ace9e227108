from __future__ import annotations

import io

import pytest

from stream_plumbing.domain.logging import LogMessage
from stream_plumbing.ports import Closeable, LogSink, Sink, Source


def test_io_streams_satisfy_ports() -> None:
    # Ports are capability protocols: any stream with the right methods qualifies.
    for stream in (io.BytesIO(), io.StringIO()):
        assert isinstance(stream, Source)
        assert isinstance(stream, Sink)
        assert isinstance(stream, Closeable)


def test_objects_without_capability_do_not_match() -> None:
    assert not isinstance(object(), Source)
    assert not isinstance(object(), Sink)
    assert not isinstance(object(), Closeable)


def test_port_defaults_raise() -> None:
    # Direct port calls without a concrete stream are wiring errors.
    class _SourceOnly(Source):
        pass

    class _SinkOnly(Sink):
        pass

    class _CloseableOnly(Closeable):
        pass

    class _LogOnly(LogSink):
        pass

    with pytest.raises(NotImplementedError):
        _SourceOnly().read(1)  # type: ignore[abstract]
    with pytest.raises(NotImplementedError):
        _SinkOnly().write(b"x")  # type: ignore[abstract]
    with pytest.raises(NotImplementedError):
        _CloseableOnly().close()  # type: ignore[abstract]
    with pytest.raises(NotImplementedError):
        _LogOnly().emit(LogMessage(level="INFO", message="x"))  # type: ignore[abstract]

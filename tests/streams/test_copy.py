from __future__ import annotations

import io
from pathlib import Path

import pytest

from stream_plumbing.domain.errors import EncodingFailure, IOFailure
from stream_plumbing.streams.transfer import copy, copy_large, skip


class _FailingSource:
    def read(self, size: int = -1) -> bytes:
        raise OSError("disk gone")


class _FlakySink:
    # Byte sink that accepts the first write and fails afterwards.
    def __init__(self) -> None:
        self.chunks: list[bytes] = []

    def write(self, data: bytes) -> int:
        if self.chunks:
            raise OSError("sink full")
        self.chunks.append(bytes(data))
        return len(data)


class _OneByteSink:
    # Raw-style sink accepting at most one byte per call.
    def __init__(self) -> None:
        self.data = bytearray()

    def write(self, data: bytes) -> int:
        self.data += bytes(data[:1])
        return 1


class _TextCollector:
    # Duck-typed character sink: no io base class, but exposes a text encoding.
    encoding = "utf-8"

    def __init__(self) -> None:
        self.parts: list[str] = []

    def write(self, data: str) -> int:
        self.parts.append(data)
        return len(data)


def test_copy_bytes_to_bytes() -> None:
    # Byte source to byte sink copies every byte unchanged.
    sink = io.BytesIO()
    assert copy(io.BytesIO(b"ABCDEFGH"), sink) == 8
    assert sink.getvalue() == b"ABCDEFGH"


def test_copy_bytes_to_chars_with_encoding() -> None:
    # Byte source to character sink decodes with the given encoding.
    sink = io.StringIO()
    assert copy(io.BytesIO(b"ABCDEFGH"), sink, "UTF-8") == 8
    assert sink.getvalue() == "ABCDEFGH"


def test_copy_bytes_to_chars_defaults_to_utf8() -> None:
    # No encoding means UTF-8, not the platform locale.
    text = "café 日本語"
    sink = io.StringIO()
    assert copy(io.BytesIO(text.encode("utf-8")), sink) == len(text)
    assert sink.getvalue() == text


def test_copy_decodes_multibyte_sequences_split_across_reads() -> None:
    # A one-byte buffer splits every multi-byte character; decoding stays incremental.
    text = "été 日本"
    sink = io.StringIO()
    copy(io.BytesIO(text.encode("utf-8")), sink, buffer_size=1)
    assert sink.getvalue() == text


def test_copy_chars_to_chars() -> None:
    # Character source to character sink copies characters, including \r\n.
    sink = io.StringIO(newline="")
    assert copy(io.StringIO("AB\r\nCD", newline=""), sink) == 6
    assert sink.getvalue() == "AB\r\nCD"


def test_copy_chars_to_bytes_encodes() -> None:
    # Character source to byte sink encodes; the count is in sink units (bytes).
    sink = io.BytesIO()
    assert copy(io.StringIO("éA"), sink) == 3
    assert sink.getvalue() == "éA".encode("utf-8")


def test_copy_chars_to_bytes_emits_bom_once() -> None:
    # Stateful encodings keep their state across chunks.
    sink = io.BytesIO()
    copy(io.StringIO("ABC"), sink, "utf-16", buffer_size=1)
    assert sink.getvalue() == "ABC".encode("utf-16")


def test_copy_to_duck_typed_text_sink() -> None:
    # Sinks exposing a text encoding receive str.
    sink = _TextCollector()
    copy(io.BytesIO(b"xyz"), sink)
    assert "".join(sink.parts) == "xyz"


def test_copy_to_text_file(tmp_path: Path) -> None:
    # File objects opened in text mode are character sinks.
    path = tmp_path / "out.txt"
    with path.open("w", encoding="utf-8", newline="") as handle:
        copy(io.BytesIO("déjà".encode("utf-8")), handle)
    assert path.read_text(encoding="utf-8") == "déjà"


def test_copy_empty_source_returns_zero() -> None:
    sink = io.BytesIO()
    assert copy(io.BytesIO(b""), sink) == 0
    assert sink.getvalue() == b""


def test_copy_continues_from_current_position() -> None:
    # Only the remaining units are copied; sources are not rewound.
    source = io.BytesIO(b"ABCDEFGH")
    source.read(3)
    sink = io.BytesIO()
    assert copy(source, sink) == 5
    assert sink.getvalue() == b"DEFGH"


def test_copy_handles_partial_raw_writes() -> None:
    # Raw sinks may accept fewer bytes than offered; copy keeps writing.
    sink = _OneByteSink()
    assert copy(io.BytesIO(b"abcdef"), sink) == 6
    assert bytes(sink.data) == b"abcdef"


def test_copy_unknown_encoding_raises() -> None:
    with pytest.raises(EncodingFailure):
        copy(io.BytesIO(b"abc"), io.StringIO(), "no-such-codec")


def test_copy_invalid_bytes_raise_encoding_failure() -> None:
    # Strict decoding fails fast on bytes that are not valid in the encoding.
    with pytest.raises(EncodingFailure):
        copy(io.BytesIO(b"ok\xff"), io.StringIO(), "utf-8")


def test_copy_replace_policy_substitutes_invalid_bytes() -> None:
    sink = io.StringIO()
    copy(io.BytesIO(b"ok\xff"), sink, "utf-8", errors="replace")
    assert sink.getvalue() == "ok\ufffd"


def test_copy_truncated_sequence_fails_at_end() -> None:
    # The last character is cut short; the decoder flush detects it.
    data = "日".encode("utf-8")[:2]
    with pytest.raises(EncodingFailure):
        copy(io.BytesIO(data), io.StringIO())


def test_copy_read_failure_raises_io_failure() -> None:
    # Endpoint failures surface as IOFailure chained to the original error.
    with pytest.raises(IOFailure) as info:
        copy(_FailingSource(), io.BytesIO())
    assert isinstance(info.value, OSError)
    assert isinstance(info.value.__cause__, OSError)
    assert "disk gone" in str(info.value)


def test_copy_write_failure_keeps_partial_output() -> None:
    # Already written chunks are not rolled back.
    sink = _FlakySink()
    with pytest.raises(IOFailure):
        copy(io.BytesIO(b"ABCD"), sink, buffer_size=2)
    assert sink.chunks == [b"AB"]


def test_copy_from_closed_source_raises_io_failure() -> None:
    source = io.BytesIO(b"abc")
    source.close()
    with pytest.raises(IOFailure):
        copy(source, io.BytesIO())


def test_copy_rejects_non_positive_buffer() -> None:
    with pytest.raises(ValueError):
        copy(io.BytesIO(b"abc"), io.BytesIO(), buffer_size=0)


def test_copy_large_with_offset_and_length() -> None:
    # Offset skips source units; length caps the copied units.
    sink = io.BytesIO()
    assert copy_large(io.BytesIO(b"0123456789"), sink, offset=2, length=5, buffer_size=2) == 5
    assert sink.getvalue() == b"23456"


def test_copy_large_char_source_counts_characters() -> None:
    sink = io.StringIO()
    assert copy_large(io.StringIO("éèêë"), sink, offset=1, length=2) == 2
    assert sink.getvalue() == "èê"


def test_copy_large_offset_past_end_copies_nothing() -> None:
    sink = io.BytesIO()
    assert copy_large(io.BytesIO(b"abc"), sink, offset=10) == 0
    assert sink.getvalue() == b""


def test_copy_large_zero_length_reads_nothing() -> None:
    source = io.BytesIO(b"abc")
    assert copy_large(source, io.BytesIO(), length=0) == 0
    assert source.tell() == 0


@pytest.mark.parametrize("kwargs", [{"offset": -1}, {"length": -2}])
def test_copy_large_rejects_invalid_window(kwargs: dict[str, int]) -> None:
    with pytest.raises(ValueError):
        copy_large(io.BytesIO(b"abc"), io.BytesIO(), **kwargs)


def test_skip_reports_units_skipped() -> None:
    source = io.BytesIO(b"abcdef")
    assert skip(source, 4, buffer_size=3) == 4
    assert source.read() == b"ef"
    assert skip(source, 10) == 0


class _NonBlockingSource:
    # Raw stream in non-blocking mode: None means no data is available yet.
    def __init__(self, reads: list[bytes | None]) -> None:
        self._reads = list(reads)

    def read(self, size: int = -1) -> bytes | None:
        return self._reads.pop(0)


def test_copy_non_blocking_source_without_data_raises_io_failure() -> None:
    # A None read is not end of stream; the bytes after it must not be lost silently.
    sink = io.BytesIO()
    with pytest.raises(IOFailure, match="non-blocking"):
        copy(_NonBlockingSource([b"AB", None, b"CD", b""]), sink, buffer_size=2)
    assert sink.getvalue() == b"AB"

from __future__ import annotations


class StreamError(Exception):
    # Base class for failures raised by stream operations.
    pass


class IOFailure(StreamError, OSError):
    # Read/write/close failure on an underlying source or sink (fail fast, no retry).
    pass


class EncodingFailure(StreamError, ValueError):
    # Unknown encoding name or data that does not decode/encode under a strict policy.
    pass

from __future__ import annotations

from typing import Protocol, runtime_checkable


# Source port: anything exposing read(n) that returns bytes or str, empty at end of stream.
@runtime_checkable
class Source(Protocol):
    def read(self, size: int = -1, /) -> bytes | str:
        """Return up to size units; an empty result means the source is exhausted."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("Source is a port; use a concrete stream.")

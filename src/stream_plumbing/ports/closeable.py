from __future__ import annotations

from typing import Protocol, runtime_checkable


# Closeable port: resources released by close_quietly and LineIterator.close.
@runtime_checkable
class Closeable(Protocol):
    def close(self) -> None:
        """Release the resource."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("Closeable is a port; use a concrete resource.")

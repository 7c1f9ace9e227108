from __future__ import annotations

from typing import Protocol, runtime_checkable


# Sink port: anything exposing write() for bytes or str.
@runtime_checkable
class Sink(Protocol):
    def write(self, data: bytes | str, /) -> int | None:
        """Write data; return value (if any) is the number of units written."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("Sink is a port; use a concrete stream.")

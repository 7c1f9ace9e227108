from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True, slots=True)
class LogMessage:
    # Structured log payload emitted to log sinks (stdout/JSONL).
    level: str
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    fields: dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.level or not self.message:
            raise ValueError("LogMessage requires non-empty level/message")
        if self.level not in _LEVELS:
            raise ValueError(f"LogMessage.level must be one of: {list(_LEVELS)}")


def level_enabled(level: str, threshold: str) -> bool:
    # Messages below the configured threshold are dropped by sinks.
    return _LEVELS.index(level) >= _LEVELS.index(threshold)

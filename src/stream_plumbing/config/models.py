from __future__ import annotations

import codecs
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Config models map YAML sections to typed settings consumed by StreamUtil and the CLI.


class IOSettings(BaseModel):
    # Stream defaults: explicit encoding and line ending, never platform-derived.
    model_config = ConfigDict(extra="forbid")
    encoding: str = "utf-8"
    buffer_size: int = Field(default=4096, gt=0)
    line_ending: str = "\n"
    decode_errors: Literal["strict", "replace"] = "strict"

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            return codecs.lookup(value).name
        except LookupError as exc:
            raise ValueError(f"unsupported encoding: {value!r}") from exc

    @field_validator("line_ending")
    @classmethod
    def _known_line_ending(cls, value: str) -> str:
        if value not in {"\n", "\r", "\r\n"}:
            raise ValueError("line_ending must be one of: \\n, \\r, \\r\\n")
        return value


class LoggingSettings(BaseModel):
    # Log sink selection for swallowed release failures and CLI diagnostics.
    model_config = ConfigDict(extra="forbid")
    sink: Literal["none", "stdout", "jsonl"] = "none"
    path: str | None = None
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "DEBUG"

    @model_validator(mode="after")
    def _jsonl_requires_path(self) -> LoggingSettings:
        if self.sink == "jsonl" and not self.path:
            raise ValueError("logging.path is required when logging.sink is jsonl")
        return self


class AppSettings(BaseModel):
    # Root settings document; every section is optional.
    model_config = ConfigDict(extra="forbid")
    io: IOSettings = Field(default_factory=IOSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

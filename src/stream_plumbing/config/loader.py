from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from stream_plumbing.config.models import AppSettings


# ConfigError is raised for invalid configuration (fail fast).
class ConfigError(ValueError):
    pass


def load_settings(path: Path | None) -> AppSettings:
    # No path means defaults; otherwise the YAML file must be a mapping of known sections.
    if path is None:
        return AppSettings()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if raw is None:
        return AppSettings()
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    return parse_settings(raw)


def parse_settings(raw: dict[str, object]) -> AppSettings:
    try:
        return AppSettings.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc

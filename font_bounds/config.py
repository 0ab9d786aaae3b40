"""Configuration loading for font-bounds.

Settings are read from a YAML file. Lookup order:

1. An explicit path passed to :meth:`Config.load`
2. The ``FONT_BOUNDS_CONFIG`` environment variable
3. ``~/.config/font-bounds/config.yaml`` (optional)

Example file::

    font: Zapfino
    size: 36
    tracking: 0.5
    scale: 4
    font_dirs:
      - ~/fonts
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from font_bounds.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "font-bounds" / "config.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Runtime settings shared by the CLI commands."""

    font: str = "Helvetica"
    size: float = 24.0
    tracking: float = 0.0
    charset: str | None = None
    scale: float = 4.0
    padding: float = 10.0
    strict_coverage: bool = True
    download_timeout: int = 30
    font_dirs: list[str] = field(default_factory=list)
    log_level: str = "WARNING"

    @classmethod
    def load(cls, path: Path | None = None) -> Config:
        """Load configuration, falling back to defaults when no file exists.

        Raises:
            FileNotFoundError: If an explicitly requested file is missing.
            ConfigError: If the file is not valid YAML or a value is invalid.
        """
        explicit = path is not None
        if path is None:
            env_path = os.environ.get("FONT_BOUNDS_CONFIG")
            if env_path:
                path = Path(env_path)
                explicit = True
            else:
                path = DEFAULT_CONFIG_PATH

        if not path.exists():
            if explicit:
                raise FileNotFoundError(f"Config file not found: {path}")
            return cls()

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax in {path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: top level must be a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown setting(s): {', '.join(unknown)}")

        config = cls()
        for key, value in data.items():
            setattr(config, key, _validate(key, value))
        return config


def _validate(key: str, value: Any) -> Any:
    if key == "font":
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"{key}: expected non-empty string")
        return value
    if key == "charset":
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"{key}: expected string, got {type(value).__name__}")
        return value
    if key in ("size", "scale"):
        number = _number(key, value)
        if number <= 0:
            raise ConfigError(f"{key}: must be greater than 0")
        return number
    if key in ("tracking", "padding"):
        number = _number(key, value)
        if key == "padding" and number < 0:
            raise ConfigError(f"{key}: must not be negative")
        return number
    if key == "strict_coverage":
        if not isinstance(value, bool):
            raise ConfigError(f"{key}: expected boolean, got {type(value).__name__}")
        return value
    if key == "download_timeout":
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"{key}: expected integer, got {type(value).__name__}")
        if value < 1:
            raise ConfigError(f"{key}: must be at least 1")
        return value
    if key == "font_dirs":
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"{key}: expected a list of strings")
        return [str(Path(v).expanduser()) for v in value]
    if key == "log_level":
        if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
            raise ConfigError(f"{key}: must be one of {', '.join(LOG_LEVELS)}")
        return value.upper()
    return value


def _number(key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{key}: expected number, got {type(value).__name__}")
    return float(value)

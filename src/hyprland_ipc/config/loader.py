from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from hyprland_ipc.config.schema import ClientConfig


class ConfigError(Exception):
    """Raised when config loading or validation fails."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


def default_config_path() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "hyprland-ipc" / "config.yaml"


def load_config(path: Path | None = None) -> ClientConfig:
    """Load and validate the client config. Returns defaults if the file is absent."""
    path = path if path is not None else default_config_path()
    if not path.exists():
        return ClientConfig()

    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(path, f"Invalid YAML: {e}") from e
    except OSError as e:
        raise ConfigError(path, f"Cannot read config: {e.strerror or e}") from e

    if raw is None:
        return ClientConfig()
    if not isinstance(raw, dict):
        raise ConfigError(path, "Expected a YAML mapping at top level")

    try:
        return ClientConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(path, f"Validation error: {e}") from e

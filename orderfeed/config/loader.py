"""YAML config loader."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from orderfeed.config.schema import OrderFeedConfig


class ConfigError(Exception):
    """Raised when the config file is missing, unreadable or invalid."""


def load_config(path: str | Path) -> OrderFeedConfig:
    """Load and validate config from a YAML file."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"config {path} must be a mapping")

    try:
        return OrderFeedConfig(**raw)
    except ValidationError as e:
        raise ConfigError(f"invalid config {path}: {e}") from e

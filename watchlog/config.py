"""Ingestion settings loaded from watchlog.yaml."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import yaml

from .errors import ConfigError

DEFAULT_CONFIG_PATH = Path("watchlog.yaml")


class ErrorPolicy(Enum):
    """What the ingester does after a line fails."""

    SKIP = "skip"
    ABORT = "abort"


@dataclass
class IngestConfig:
    """Configuration for one ingestion run."""

    on_error: ErrorPolicy = ErrorPolicy.SKIP
    log_level: str = "WARNING"
    warn_on_episode_regression: bool = True

    def to_dict(self) -> dict:
        """Serialize to dict for YAML storage."""
        return {
            "on_error": self.on_error.value,
            "log_level": self.log_level,
            "warn_on_episode_regression": self.warn_on_episode_regression,
        }

    @classmethod
    def from_dict(cls, data: dict) -> IngestConfig:
        """Deserialize from dict.

        Raises:
            ConfigError: If a value is not one the ingester understands.
        """
        defaults = cls()

        on_error = data.get("on_error", defaults.on_error.value)
        try:
            policy = ErrorPolicy(str(on_error).lower())
        except ValueError as exc:
            raise ConfigError(f"Invalid on_error value: {on_error!r}") from exc

        log_level = str(data.get("log_level", defaults.log_level)).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"Invalid log_level value: {log_level!r}")

        warn = data.get("warn_on_episode_regression", defaults.warn_on_episode_regression)
        if not isinstance(warn, bool):
            raise ConfigError(f"warn_on_episode_regression must be a boolean, got {warn!r}")

        return cls(on_error=policy, log_level=log_level, warn_on_episode_regression=warn)


def load_config(path: Path | None = None) -> IngestConfig:
    """Load configuration from a YAML file.

    Args:
        path: Config file location. Defaults to ``watchlog.yaml`` in the
            working directory.

    Returns:
        IngestConfig with defaults for any missing key. A missing or empty
        file yields the defaults.

    Raises:
        ConfigError: If the file is not valid YAML or holds invalid values.
    """
    config_path = path or DEFAULT_CONFIG_PATH
    if not config_path.exists():
        return IngestConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Cannot parse {config_path}: {exc}") from exc

    if data is None:
        return IngestConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {config_path}, got {type(data).__name__}")
    return IngestConfig.from_dict(data)

"""User preferences stored as JSON in the config directory."""

from __future__ import annotations

import fcntl
import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path

from countdown.core.fields import DEFAULT_FIELD

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_DIR = Path.home() / ".config" / "countdown"
_CONFIG_FILE = "config.json"
_ENV_CONFIG_DIR = "COUNTDOWN_CONFIG_DIR"

ALERT_KINDS = ("bell", "silent")


class ConfigError(Exception):
    """Raised when stored or supplied configuration cannot be used."""


def default_config_dir() -> Path:
    """Return the config directory, honouring ``COUNTDOWN_CONFIG_DIR``."""
    override = os.environ.get(_ENV_CONFIG_DIR)
    return Path(override) if override else _DEFAULT_CONFIG_DIR


@dataclass
class Settings:
    """Preferences applied before the timer is driven.

    ``minutes`` and ``seconds`` are kept as raw field text, exactly what the
    user would have typed.
    """

    minutes: str = DEFAULT_FIELD
    seconds: str = DEFAULT_FIELD
    alert: str = "bell"

    @classmethod
    def load(cls, config_dir: Path | None = None) -> Settings:
        """Read ``config.json``; a missing file yields the defaults."""
        path = (config_dir if config_dir is not None else default_config_dir()) / _CONFIG_FILE
        if not path.exists():
            logger.debug("no config at %s, using defaults", path)
            return cls()

        with open(path, encoding="utf-8") as f:
            fcntl.flock(f, fcntl.LOCK_SH)
            try:
                data = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                raise ConfigError(f"{path} is not valid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a JSON object")

        settings = cls()
        for key in ("minutes", "seconds", "alert"):
            if key in data:
                settings.set(key, str(data[key]))
        logger.debug("loaded config from %s", path)
        return settings

    def set(self, key: str, value: str) -> None:
        """Assign one preference, validating names and alert kinds."""
        if key not in ("minutes", "seconds", "alert"):
            raise ConfigError(f"unknown setting {key!r}")
        if key == "alert" and value not in ALERT_KINDS:
            raise ConfigError(
                f"alert must be one of {', '.join(ALERT_KINDS)}, got {value!r}"
            )
        setattr(self, key, value)

    def save(self, config_dir: Path | None = None) -> Path:
        """Write preferences to ``config.json`` with an exclusive lock."""
        directory = config_dir if config_dir is not None else default_config_dir()
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / _CONFIG_FILE
        with open(path, "w", encoding="utf-8") as f:
            fcntl.flock(f, fcntl.LOCK_EX)
            json.dump(asdict(self), f)
        logger.debug("saved config to %s", path)
        return path

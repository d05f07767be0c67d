"""Configuration loading and management."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from logstamp.core.exceptions import ConfigError, ConfigNotFoundError
from logstamp.core.types import PathLike

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 2
MIN_PRECISION = 1
MAX_PRECISION = 4

DEFAULT_TIMEZONE = "UTC"

CONFIG_FILENAME = "logstamp.toml"


@dataclass
class LogstampConfig:
    """Loaded configuration.

    Every field has a command-line counterpart; options given on the
    command line take precedence.
    """

    precision: int = DEFAULT_PRECISION
    format: str | None = None
    relative: bool = False
    monotonic: bool = False
    timezone: str | None = None

    _source_path: Path | None = field(default=None, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LogstampConfig:
        known = {"precision", "format", "relative", "monotonic", "timezone"}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    def validate(self) -> None:
        """Check values are usable.

        Raises:
            ConfigError: On an out-of-range precision or unknown timezone.
        """
        if not isinstance(self.precision, int) or isinstance(self.precision, bool):
            raise ConfigError(f"precision must be an integer, got {self.precision!r}")
        if not MIN_PRECISION <= self.precision <= MAX_PRECISION:
            raise ConfigError(
                f"precision {self.precision} is out of range. "
                f"Valid values are between {MIN_PRECISION} and {MAX_PRECISION} inclusive."
            )
        resolve_timezone(self.timezone)

    def get_timezone(self) -> tzinfo:
        return resolve_timezone(self.timezone)


def resolve_timezone(name: str | None = None) -> tzinfo:
    """Pick the display timezone.

    Lookup order:
    1. Explicit *name* (from config)
    2. ``TZ`` environment variable
    3. UTC
    """
    name = name or os.environ.get("TZ") or DEFAULT_TIMEZONE
    # POSIX allows a leading colon, e.g. TZ=:Europe/London
    name = name.lstrip(":")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"Unknown timezone: {name!r}") from e


def find_config_file() -> Path | None:
    """Find configuration file in priority order.

    Search order:
    1. ./logstamp.toml (current directory)
    2. ./pyproject.toml [tool.logstamp] section
    3. Git repository root logstamp.toml
    4. ~/.config/logstamp/config.toml
    """
    # Current directory
    cwd = Path.cwd()
    if (cwd / CONFIG_FILENAME).exists():
        return cwd / CONFIG_FILENAME

    if (cwd / "pyproject.toml").exists():
        try:
            with open(cwd / "pyproject.toml", "rb") as f:
                pyproject = tomllib.load(f)
            if "logstamp" in pyproject.get("tool", {}):
                return cwd / "pyproject.toml"
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.debug(f"Ignoring unreadable pyproject.toml: {e}")

    # Git root
    git_root = _find_git_root(cwd)
    if git_root and (git_root / CONFIG_FILENAME).exists():
        return git_root / CONFIG_FILENAME

    # User config
    user_config = Path.home() / ".config" / "logstamp" / "config.toml"
    if user_config.exists():
        return user_config

    return None


def _find_git_root(start: Path) -> Path | None:
    """Find git repository root."""
    current = start.resolve()
    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent
    return None


def load_config(path: PathLike | None = None) -> LogstampConfig:
    """Load configuration from file.

    Args:
        path: Explicit config path or None to auto-discover

    Raises:
        ConfigNotFoundError: If an explicit *path* does not exist.
        ConfigError: If the file is not valid TOML or holds bad values.
    """
    if path is None:
        path = find_config_file()
    elif not Path(path).exists():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")

    if path is None:
        return LogstampConfig()  # Empty config, use defaults

    path = Path(path)

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    # Handle pyproject.toml
    if path.name == "pyproject.toml":
        data = data.get("tool", {}).get("logstamp", {})

    config = LogstampConfig.from_dict(data)
    config._source_path = path
    config.validate()
    logger.debug(f"Loaded configuration from {path}")

    return config


# Global config cache
_cached_config: LogstampConfig | None = None


def get_config() -> LogstampConfig:
    """Get the global configuration (cached)."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(path: PathLike | None = None) -> LogstampConfig:
    """Reload configuration (clears cache)."""
    global _cached_config
    _cached_config = load_config(path)
    return _cached_config

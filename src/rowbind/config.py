"""Settings for rowbind.

Settings come from an optional TOML file and environment overrides:

    [database]
    url = "sqlite+aiosqlite:///data/app.db"
    echo = false

    [logging]
    level = "INFO"

Environment variables ROWBIND_DATABASE_URL, ROWBIND_ECHO and
ROWBIND_LOG_LEVEL take precedence over the file.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import toml

from .exceptions import ConfigurationError

DEFAULT_CONFIG_FILE = "rowbind.toml"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass
class Settings:
    """Runtime settings.

    Attributes:
        database_url: SQLAlchemy async database URL
        echo: Whether the engine echoes SQL
        log_level: Level name for the rowbind logger
    """
    database_url: str = "sqlite+aiosqlite:///:memory:"
    echo: bool = False
    log_level: str = "WARNING"

    def apply_logging(self) -> logging.Logger:
        """Configure the package logger with this log level."""
        from .log import configure_logging
        return configure_logging(self.log_level)


def _parse_bool(value: str, name: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}", value=value)


def load_settings(path: Optional[str | Path] = None) -> Settings:
    """Load settings from a TOML file and the environment.

    Args:
        path: Settings file. If None, ./rowbind.toml is read when present.

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If an explicit file is missing or a value is invalid
    """
    data = {}
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}", path=str(config_path))
    else:
        config_path = Path.cwd() / DEFAULT_CONFIG_FILE

    if config_path.exists():
        try:
            with open(config_path) as f:
                data = toml.load(f)
        except toml.TomlDecodeError as e:
            raise ConfigurationError(f"Invalid config file {config_path}: {e}", path=str(config_path)) from e

    database = data.get('database', {})
    logging_section = data.get('logging', {})

    settings = Settings(
        database_url=database.get('url', Settings.database_url),
        echo=database.get('echo', Settings.echo),
        log_level=str(logging_section.get('level', Settings.log_level)),
    )

    if url := os.environ.get('ROWBIND_DATABASE_URL'):
        settings.database_url = url
    if (echo := os.environ.get('ROWBIND_ECHO')) is not None:
        settings.echo = _parse_bool(echo, 'ROWBIND_ECHO')
    if level := os.environ.get('ROWBIND_LOG_LEVEL'):
        settings.log_level = level

    if not isinstance(settings.echo, bool):
        raise ConfigurationError(f"database.echo must be a boolean, got {settings.echo!r}", value=settings.echo)
    if logging.getLevelName(settings.log_level.upper()) == f"Level {settings.log_level.upper()}":
        raise ConfigurationError(f"Unknown log level: {settings.log_level!r}", value=settings.log_level)

    return settings

"""
Logging setup for the console application.

Diagnostics (discovery progress, resolved defaults, startup failures) go
through standard library loggers under the ``appconsole`` hierarchy and are
written to stderr. User-facing text is never logged; commands write it to the
output writer instead.

Example:
    >>> from appconsole.log import LogConfig, LoggerFactory
    >>>
    >>> lg = LoggerFactory.create("loader", LogConfig.from_params(level="debug"))
    >>> lg.debug("scanning directory", extra={"path": "/srv/app/commands"})
    [12:34:56,789] [D] scanning directory [path:/srv/app/commands] [1234] [appconsole.loader]
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, TextIO

from .exceptions import ConfigError

ROOT_LOGGER_NAME = "appconsole"


class LogConstants:
    """Constants for the logging system."""

    DEFAULT_FORMAT: str = "[%(asctime)s] [%(levelname).1s] %(message)s"

    LEVEL_NAMES: dict[str, int | bool] = {
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG,
        "false": False,  # Special value to disable all logging
    }

    RESET: str = "\x1b[0m"

    COLORS: dict[int, str] = {
        logging.DEBUG: "\x1b[38;5;32m",
        logging.INFO: "\x1b[36m",
        logging.WARNING: "\x1b[33m",
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[35m",
    }

    # Attributes every LogRecord carries; anything else came in through extra=
    RECORD_ATTRS: frozenset[str] = frozenset(
        vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
        | {"message", "asctime", "taskName"}
    )


@dataclass(frozen=True)
class LogConfig:
    """Immutable logging configuration."""

    level: int | bool = logging.INFO  # int for normal levels, False to disable logging
    micros: bool = False
    colors: bool = False

    @staticmethod
    def _resolve_level(level: str | int | bool) -> int | bool:
        """Resolve level parameter to int or False."""
        if isinstance(level, bool):
            return False if not level else logging.INFO
        if isinstance(level, str):
            if level.isnumeric():
                return int(level)
            if level.lower() in LogConstants.LEVEL_NAMES:
                return LogConstants.LEVEL_NAMES[level.lower()]
            raise ConfigError(f"Invalid log level: {level}", level=level)
        return level

    @classmethod
    def from_params(
        cls, level: str | int | bool, micros: bool = False, colors: bool = False
    ) -> LogConfig:
        """
        Create LogConfig from individual parameters.

        Args:
            level: Log level (string name, numeric value, or False to disable logging)
            micros: Whether to show microsecond precision
            colors: Whether to enable colored output

        Returns:
            LogConfig instance

        Raises:
            ConfigError: If the level name is unknown
        """
        return cls(level=cls._resolve_level(level), micros=micros, colors=colors)

    @classmethod
    def from_config(cls, config_dict: dict, section: str = "logging") -> LogConfig:
        """
        Create LogConfig from a configuration dictionary.

        Args:
            config_dict: Configuration dictionary (e.g., Config.dict())
            section: Dotted path of the logging section (default: "logging")

        Returns:
            LogConfig instance, defaults for a missing section
        """
        current: Any = config_dict
        for part in section.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                current = {}
                break
        if not isinstance(current, dict):
            current = {}

        return cls.from_params(
            level=current.get("level", "warning"),
            micros=current.get("microseconds", current.get("micros", False)),
            colors=current.get("colors", False),
        )


class LogFormatter(logging.Formatter):
    """
    Formatter rendering ``[time] [L] message [key:value] [pid] [name]``.

    Extra fields passed via ``extra={...}`` are appended in sorted key order.
    """

    def __init__(self, config: LogConfig):
        super().__init__(LogConstants.DEFAULT_FORMAT)
        self._config = config

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        """Format timestamp, optionally with microsecond precision."""
        base = self.converter(record.created)
        stamp = f"{base.tm_hour:02d}:{base.tm_min:02d}:{base.tm_sec:02d}"
        if self._config.micros:
            return f"{stamp},{int((record.created % 1) * 1_000_000):06d}"
        return f"{stamp},{int(record.msecs):03d}"

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extra = _extract_extra(record)
        if extra:
            line += " " + " ".join(f"[{k}:{v}]" for k, v in sorted(extra.items()))
        line += f" [{record.process}] [{record.name}]"
        if self._config.colors:
            color = LogConstants.COLORS.get(record.levelno)
            if color:
                line = color + line + LogConstants.RESET
        return line


def _extract_extra(record: logging.LogRecord) -> dict[str, Any]:
    """Return the fields that were attached through ``extra=``."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in LogConstants.RECORD_ATTRS and not key.startswith("_")
    }


class LoggerFactory:
    """Factory for creating and configuring loggers."""

    @staticmethod
    def _qualify(name: str) -> str:
        if name in ("", "/", ROOT_LOGGER_NAME):
            return ROOT_LOGGER_NAME
        if name.startswith(ROOT_LOGGER_NAME + "."):
            return name
        return f"{ROOT_LOGGER_NAME}.{name.strip('/').replace('/', '.')}"

    @staticmethod
    def create_root(config: LogConfig, stream: TextIO | None = None) -> logging.Logger:
        """
        Configure the ``appconsole`` root logger.

        Replaces any handler installed by a previous call, so calling this
        more than once (tests, embedding hosts) does not duplicate output.

        Args:
            config: Logger configuration
            stream: Destination stream (defaults to sys.stderr)

        Returns:
            Configured root logger
        """
        lg = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(lg.handlers):
            lg.removeHandler(handler)

        if config.level is False:
            lg.setLevel(logging.CRITICAL + 1)
            lg.addHandler(logging.NullHandler())
        else:
            lg.setLevel(config.level)
            handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
            handler.setFormatter(LogFormatter(config))
            lg.addHandler(handler)
        lg.propagate = False
        return lg

    @staticmethod
    def create(name: str, config: LogConfig | None = None) -> logging.Logger:
        """
        Get a logger below the ``appconsole`` hierarchy.

        Args:
            name: Logger name, e.g. "loader" or "/loader"
            config: When given, the root logger is (re)configured first

        Returns:
            Logger instance inheriting the root logger's handler
        """
        if config is not None:
            LoggerFactory.create_root(config)
        return logging.getLogger(LoggerFactory._qualify(name))

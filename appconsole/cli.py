#!/usr/bin/env python3
"""
Console entry point.

Usage:
    appconsole                      run the default command (list)
    appconsole <command> [options]  run a command
    appconsole <command> --help     show a command's help
    appconsole --version            show program name and version

Options understood before any command runs:
    --config=<file>      YAML config (default: $APPCONSOLE_CONFIG or etc/console.yaml)
    --log-level=<level>  override logging.level (debug, info, warning, error)
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from pathlib import Path

from appconsole.application import ConsoleApplication
from appconsole.config import Config, ConsoleSettings
from appconsole.constants import DEFAULT_CONFIG_FILE, ENV_PREFIX
from appconsole.exceptions import ConsoleError
from appconsole.io import ArgvInput, ConsoleOutput
from appconsole.log import LogConfig, LoggerFactory


def _find_config_file(input: ArgvInput) -> Path | None:
    """Explicit --config, then $APPCONSOLE_CONFIG, then etc/console.yaml if present."""
    explicit = input.get_option("config") or os.environ.get(f"{ENV_PREFIX}CONFIG")
    if isinstance(explicit, str) and explicit:
        return Path(explicit)
    default = Path(DEFAULT_CONFIG_FILE)
    return default if default.is_file() else None


def _load_settings(input: ArgvInput) -> tuple[ConsoleSettings, LogConfig]:
    config_file = _find_config_file(input)
    if config_file is None:
        return ConsoleSettings(), LogConfig.from_params("warning")

    config = Config(config_file)
    return ConsoleSettings.from_config(config), LogConfig.from_config(config.dict())


def _build_app(input: ArgvInput) -> ConsoleApplication:
    """Load configuration, set up logging and construct the application."""
    settings, log_config = _load_settings(input)

    level = input.get_option("log-level")
    if isinstance(level, str):
        log_config = LogConfig.from_params(
            level, micros=log_config.micros, colors=log_config.colors
        )
    LoggerFactory.create_root(log_config)

    return ConsoleApplication(settings)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the console."""
    input = ArgvInput(argv)
    lg = LoggerFactory.create("cli", LogConfig.from_params("warning"))

    try:
        app = _build_app(input)
    except (ConsoleError, OSError) as e:
        lg.error("console failed to start", extra={"error": e})
        return 1

    app.run(input, ConsoleOutput())
    return 0


if __name__ == "__main__":
    sys.exit(main())

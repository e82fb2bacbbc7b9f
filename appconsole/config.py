"""
Configuration loading for the console application.

Config reads a YAML file and applies environment variable overrides.
ConsoleSettings is the explicit configuration object handed to the loader and
the application: base path, modules root, module paths and the default
command name. Nothing in the package reads configuration from global state.

Example config (etc/console.yaml):

    console:
      base_path: ..
      modules_dir: ../modules
      module_paths:
        - acme/payments
        - acme/reports
      default_command: list
    logging:
      level: warning
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .constants import (
    CORE_COMMANDS_SUBDIR,
    DEFAULT_COMMAND_NAME,
    DEFAULT_PROGRAM_NAME,
    ENV_PREFIX,
    MAX_CONFIG_SIZE_BYTES,
    MODULE_COMMANDS_SUBDIR,
)
from .exceptions import ConfigError

# Helper functions for Config._load()


def _check_file_size(path: Path) -> None:
    """Check file size limit to prevent DoS attacks."""
    file_size = os.path.getsize(path)
    if file_size > MAX_CONFIG_SIZE_BYTES:
        raise ConfigError(
            f"Configuration file '{path}' is {file_size} bytes, "
            f"exceeding maximum size of {MAX_CONFIG_SIZE_BYTES} bytes",
            path=str(path),
        )


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    """Load a YAML file whose root must be a mapping (empty file -> {})."""
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in '{path}': {e}", path=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration root in '{path}' must be a mapping, "
            f"got {type(data).__name__}",
            path=str(path),
        )
    return data


class Config:
    """
    YAML configuration with dotted-path access and environment overrides.

    Environment Variable Override Format:
        APPCONSOLE_<SECTION>_<KEY>=value

    Examples:
        APPCONSOLE_LOGGING_LEVEL=debug
        APPCONSOLE_CONSOLE_MODULE_PATHS=acme/payments,acme/reports

    Keys containing underscores cannot be reached segment by segment, so an
    override also matches an existing key whose name joins the remaining
    segments (``CONSOLE_DEFAULT_COMMAND`` -> ``console.default_command``).
    """

    def __init__(
        self,
        fname: str | Path,
        enable_env_overrides: bool = True,
        env_prefix: str = ENV_PREFIX,
    ):
        """
        Load configuration from a YAML file.

        Args:
            fname: Path to the YAML configuration file
            enable_env_overrides: Whether to apply environment variable overrides
            env_prefix: Prefix for environment variables

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigError: If the file is too large, malformed or not a mapping
        """
        self._enable_env_overrides = enable_env_overrides
        self._env_prefix = env_prefix
        self._path = Path(fname).resolve()
        self._data: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        _check_file_size(self._path)
        data = _load_yaml_mapping(self._path)
        if self._enable_env_overrides:
            data = self._apply_env_overrides(data)
        self._data = data

    @property
    def path(self) -> Path:
        """Resolved path of the loaded file."""
        return self._path

    def reload(self) -> Config:
        """Re-read the file and re-apply environment overrides."""
        self._load()
        return self

    def dict(self) -> dict[str, Any]:
        """Return the raw configuration mapping."""
        return self._data

    def has(self, path: str) -> bool:
        """Check whether a dotted path exists."""
        sentinel = object()
        return self.get(path, sentinel) is not sentinel

    def get(self, path: str, default: Any = None) -> Any:
        """
        Get a value by dotted path.

        Args:
            path: Dotted key path, e.g. "console.module_paths"
            default: Value returned when any segment is missing

        Returns:
            The configured value or default
        """
        current: Any = self._data
        for part in path.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def _apply_env_overrides(self, data: dict[str, Any]) -> dict[str, Any]:
        for env_key, env_value in self.get_env_overrides().items():
            parts = env_key[len(self._env_prefix) :].lower().split("_")
            _set_nested_value(data, parts, _convert_env_value(env_value))
        return data

    def get_env_overrides(self) -> dict[str, str]:
        """Collect all environment variables with the configured prefix."""
        if not self._enable_env_overrides:
            return {}
        return {k: v for k, v in os.environ.items() if k.startswith(self._env_prefix)}


def _set_nested_value(data: dict, parts: list[str], value: Any) -> None:
    """
    Set a nested value, descending into existing sections.

    When the next segments join (with "_") into an existing key of the current
    section, that key wins; otherwise missing sections are created.
    """
    current = data
    i = 0
    while i < len(parts) - 1:
        joined = "_".join(parts[i:])
        if joined in current:
            break
        part = parts[i]
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
        i += 1
    current["_".join(parts[i:])] = value


def _convert_env_value(value: str) -> bool | int | float | str | list | None:
    """Convert environment variable string to an appropriate type."""
    if value.lower() in ("null", "none", ""):
        return None

    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    # Handle list values (comma-separated)
    if "," in value:
        return [_convert_env_value(v.strip()) for v in value.split(",")]

    if re.fullmatch(r"-?\d+", value):
        return int(value)
    if re.fullmatch(r"-?\d+\.\d*", value):
        return float(value)
    return value


def _resolve_path(value: Any, relative_to: Path) -> Path:
    path = Path(os.path.expanduser(str(value)))
    if not path.is_absolute():
        path = relative_to / path
    return path.resolve()


@dataclass
class ConsoleSettings:
    """
    Explicit configuration for command discovery and dispatch.

    Attributes:
        base_path: Application root; core commands live in
            <base_path>/application/commands
        modules_dir: Root directory holding module directories
        module_paths: Module paths relative to modules_dir, or None when
            module command loading should be skipped
        default_command: Name of the command run when none is given
        program_name: Name printed by --version
        cache_dir: Directory emptied by the cache-clear command
    """

    base_path: Path = field(default_factory=Path.cwd)
    modules_dir: Path | None = None
    module_paths: list[str] | None = None
    default_command: str | None = DEFAULT_COMMAND_NAME
    program_name: str = DEFAULT_PROGRAM_NAME
    cache_dir: Path | None = None

    def __post_init__(self) -> None:
        self.base_path = Path(self.base_path)
        if self.modules_dir is None:
            self.modules_dir = self.base_path / "modules"
        else:
            self.modules_dir = Path(self.modules_dir)
        if self.cache_dir is None:
            self.cache_dir = self.base_path / "tmp"
        else:
            self.cache_dir = Path(self.cache_dir)
        if not isinstance(self.module_paths, (list, tuple)):
            self.module_paths = None
        else:
            self.module_paths = [str(p) for p in self.module_paths]

    @property
    def core_commands_dir(self) -> Path:
        """Directory scanned for the application's own commands."""
        return self.base_path.joinpath(*CORE_COMMANDS_SUBDIR)

    def modules_directory(self) -> Path:
        """Root directory holding module directories."""
        assert self.modules_dir is not None
        return self.modules_dir

    def module_command_dirs(self) -> list[Path]:
        """Commands directory of every configured module, in configured order."""
        if self.module_paths is None:
            return []
        root = self.modules_directory()
        return [root / path / MODULE_COMMANDS_SUBDIR for path in self.module_paths]

    @classmethod
    def from_config(cls, config: Config, section: str = "console") -> ConsoleSettings:
        """
        Build settings from a loaded Config.

        Relative paths are resolved against the config file's directory.
        A module_paths value that is not a list disables module loading.

        Args:
            config: Loaded configuration
            section: Dotted path of the console section (default: "console")

        Returns:
            ConsoleSettings instance
        """
        values = config.get(section) or {}
        if not isinstance(values, dict):
            raise ConfigError(f"Section '{section}' must be a mapping", section=section)

        config_dir = config.path.parent
        base_path = _resolve_path(values.get("base_path", "."), config_dir)

        def optional_path(key: str) -> Path | None:
            value = values.get(key)
            return _resolve_path(value, config_dir) if value else None

        return cls(
            base_path=base_path,
            modules_dir=optional_path("modules_dir"),
            module_paths=values.get("module_paths"),
            default_command=values.get("default_command", DEFAULT_COMMAND_NAME),
            program_name=values.get("program_name", DEFAULT_PROGRAM_NAME),
            cache_dir=optional_path("cache_dir"),
        )

from importlib.metadata import PackageNotFoundError, version

from .application import ConsoleApplication
from .commands import BUILTIN_COMMANDS, Command, CommandConfig
from .config import Config, ConsoleSettings
from .exceptions import (
    CommandLoadError,
    CommandRegistrationError,
    ConfigError,
    ConsoleError,
    DuplicateCommandError,
    MissingContextError,
    UndefNameError,
)
from .io import ArgvInput, BufferedOutput, ConsoleInput, ConsoleOutput
from .loader import CommandLoader, CommandSource
from .log import LogConfig, LoggerFactory
from .registry import CommandRegistry

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("appconsole")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

# Explicit public API
__all__ = [
    # Version
    "__version__",
    # Core classes
    "ConsoleApplication",
    "CommandRegistry",
    "CommandLoader",
    "CommandSource",
    "Command",
    "CommandConfig",
    "BUILTIN_COMMANDS",
    # Configuration
    "Config",
    "ConsoleSettings",
    # Logging
    "LogConfig",
    "LoggerFactory",
    # Input / output
    "ArgvInput",
    "ConsoleInput",
    "ConsoleOutput",
    "BufferedOutput",
    # Exceptions
    "ConsoleError",
    "DuplicateCommandError",
    "CommandRegistrationError",
    "CommandLoadError",
    "ConfigError",
    "MissingContextError",
    "UndefNameError",
]

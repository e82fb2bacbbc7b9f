"""
Command base class and the built-in commands shipped with the console.
"""

from .base import COMMAND_FACTORIES, Command, CommandConfig, CommandFactory
from .cache_clear_command import CacheClearCommand
from .config_command import ConfigCommand
from .generate_command_command import GenerateCommandCommand
from .generate_module_command import GenerateModuleCommand
from .list_command import ListCommand

# Built-in commands, registered before any discovered command
BUILTIN_COMMANDS: list[CommandFactory] = [
    CacheClearCommand,
    ConfigCommand,
    GenerateCommandCommand,
    GenerateModuleCommand,
    ListCommand,
]

__all__ = [
    "BUILTIN_COMMANDS",
    "COMMAND_FACTORIES",
    "Command",
    "CommandConfig",
    "CommandFactory",
    "CacheClearCommand",
    "ConfigCommand",
    "GenerateCommandCommand",
    "GenerateModuleCommand",
    "ListCommand",
]

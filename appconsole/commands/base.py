"""
Base command class and the command factory manifest.

Every concrete Command subclass registers a zero-argument factory for itself
in COMMAND_FACTORIES when its class body is executed, keyed by the defining
module and the lower-cased class name. The loader imports a discovered
command file and resolves the type derived from the file name through this
manifest instead of looking symbols up by string.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..exceptions import MissingContextError, UndefNameError
from ..log import LoggerFactory

if TYPE_CHECKING:
    from ..application import ConsoleApplication
    from ..io import ConsoleInput, OutputWriter

CommandFactory = Callable[[], "Command"]

# (module name, lower-cased class name) -> factory
COMMAND_FACTORIES: dict[tuple[str, str], CommandFactory] = {}


def factory_key(module_name: str, type_name: str) -> tuple[str, str]:
    """Manifest key for a command type defined in a module."""
    return module_name, type_name.lower()


def get_factory(module_name: str, type_name: str) -> CommandFactory | None:
    """Look up the factory of a command type, matching the type name case-insensitively."""
    return COMMAND_FACTORIES.get(factory_key(module_name, type_name))


def forget_module(module_name: str) -> None:
    """Drop all manifest entries of a module (used before re-importing it)."""
    for key in [k for k in COMMAND_FACTORIES if k[0] == module_name]:
        del COMMAND_FACTORIES[key]


@dataclass
class CommandConfig:
    """Configuration for a command."""

    name: str
    description: str = ""
    usage: str = ""
    # (aliases, help text) pairs listed by the default help output
    options: list[tuple[str, str]] = field(default_factory=list)


class Command:
    """
    Base class for console commands.

    Subclasses provide their configuration through _create_config() and their
    behavior through execute(). The application injects the parsed input and
    a back-reference to itself right before calling execute() or help().

    Example:
        class GreetCommand(Command):
            def _create_config(self) -> CommandConfig:
                return CommandConfig(name="greet", description="Say hello")

            def execute(self, output: OutputWriter) -> None:
                who = self.input.get_option(("n", "name"), "world")
                output.write_ln(f"Hello, {who}!")
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        COMMAND_FACTORIES[factory_key(cls.__module__, cls.__name__)] = cls

    def __init__(self, config: CommandConfig | None = None) -> None:
        """
        Initialize the command.

        Args:
            config: Command configuration (defaults to _create_config())
        """
        self.config = config or self._create_config()
        self._input: ConsoleInput | None = None
        self._application: ConsoleApplication | None = None
        self._logger: logging.Logger | None = None

    def _create_config(self) -> CommandConfig:
        """Create default configuration. Override in subclasses."""
        raise UndefNameError(self.__class__)

    @property
    def name(self) -> str:
        """
        Get the case-normalized command name.

        Raises:
            UndefNameError: If the configuration has no name
        """
        if self.config and self.config.name:
            return self.config.name.lower()
        raise UndefNameError(self.__class__)

    @property
    def description(self) -> str:
        """One-line description shown by the list command."""
        return self.config.description

    @property
    def lg(self) -> logging.Logger:
        """Logger named after the command."""
        if self._logger is None:
            self._logger = LoggerFactory.create(f"commands.{self.name}")
        return self._logger

    def set_input(self, input: ConsoleInput) -> None:
        """Inject the parsed input."""
        self._input = input

    def set_application(self, application: ConsoleApplication) -> None:
        """Inject the application running this command."""
        self._application = application

    @property
    def input(self) -> ConsoleInput:
        """
        Parsed input of the current invocation.

        Raises:
            MissingContextError: If no input was injected
        """
        if self._input is None:
            raise MissingContextError(self.name, "input")
        return self._input

    @property
    def application(self) -> ConsoleApplication:
        """
        Application running this command.

        Raises:
            MissingContextError: If no application was injected
        """
        if self._application is None:
            raise MissingContextError(self.name, "application")
        return self._application

    def execute(self, output: OutputWriter) -> None:
        """Run the command. Override in subclasses."""
        raise NotImplementedError(
            f"Command '{self.name}' must implement execute(output)"
        )

    def help(self, output: OutputWriter) -> None:
        """Write usage, description and known options."""
        output.write_ln(f"Usage: {self.config.usage or self.name + ' [options]'}")
        if self.config.description:
            output.write_ln()
            output.write_ln(self.config.description)
        if self.config.options:
            output.write_ln()
            output.write_ln("Options:")
            width = max(len(aliases) for aliases, _ in self.config.options)
            for aliases, text in self.config.options:
                output.write_ln(f"  {aliases.ljust(width)}  {text}")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.config.name!r}>"

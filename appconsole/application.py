"""
Console application: command container and dispatcher.

Loads all available commands on construction from

  - the built-in command set
  - <base_path>/application/commands
  - <modules_dir>/<module_path>/commands, for every configured module

and runs the command named by the first positional argument.

Sample usage:
    app = ConsoleApplication(ConsoleSettings(base_path=Path("/srv/shop")))
    app.add(MyCustomCommand())
    app.run(ArgvInput(["my-custom", "--force"]))
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .config import ConsoleSettings
from .constants import HELP_OPTION, VERSION_OPTION
from .io import ArgvInput, ConsoleOutput
from .loader import CommandLoader
from .log import LoggerFactory
from .registry import CommandRegistry

if TYPE_CHECKING:
    from .commands.base import Command
    from .io import ConsoleInput, OutputWriter


def _package_version() -> str:
    """Package version, with the build commit when build info is available."""
    from . import __version__

    try:
        from . import _build_info  # type: ignore[attr-defined]
    except ImportError:
        return __version__

    commit = getattr(_build_info, "COMMIT_SHORT", "")
    if not commit:
        return __version__
    dirty = "*" if getattr(_build_info, "MODIFIED", False) else ""
    return f"{__version__} ({commit}{dirty})"


class ConsoleApplication:
    """
    Container for the console's commands.

    Construction is all-or-nothing: a duplicate command name or a broken
    command file raises and no application is created. Running never raises
    for an unknown command name; it reports it on the output instead.
    """

    def __init__(
        self,
        settings: ConsoleSettings | None = None,
        default_command_name: str | None = None,
        loader: CommandLoader | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Load commands and pick the default command.

        Args:
            settings: Paths and defaults (defaults to ConsoleSettings())
            default_command_name: Overrides settings.default_command
            loader: Command loader (defaults to a CommandLoader over settings)
            logger: Logger (defaults to the "application" logger)

        Raises:
            DuplicateCommandError: If two commands share a name
            CommandLoadError: If a command file cannot be turned into a command
            OSError: If an existing commands directory cannot be read
        """
        self._settings = settings or ConsoleSettings()
        self._lg = logger or LoggerFactory.create("application")
        self._commands = CommandRegistry()

        loader = loader or CommandLoader(self._settings)
        loader.load_all(self._commands)

        name = default_command_name or self._settings.default_command
        if name and name in self._commands:
            self._commands.set_default(name)
            self._lg.debug("default command resolved", extra={"command": name})
        elif name:
            self._lg.debug("default command not registered", extra={"command": name})

        # Sorting commands in ascending order
        self._commands.sort()

    @property
    def settings(self) -> ConsoleSettings:
        return self._settings

    @property
    def registry(self) -> CommandRegistry:
        return self._commands

    @property
    def program_name(self) -> str:
        return self._settings.program_name

    @property
    def version(self) -> str:
        return _package_version()

    def run(
        self, input: ConsoleInput | None = None, output: OutputWriter | None = None
    ) -> None:
        """
        Run the command selected by the input.

        With no command name, --version/-v prints the program name and
        version; otherwise the default command runs. --help/-h shows the
        selected command's help instead of executing it. Every invocation that
        reaches a command, and every not-found report, ends with a blank line.

        Args:
            input: Parsed arguments (defaults to ArgvInput over sys.argv)
            output: Output writer (defaults to ConsoleOutput on stdout)
        """
        if input is None:
            input = ArgvInput()
        if output is None:
            output = ConsoleOutput()

        command_name = input.get_first_argument()
        command: Command | None = None

        if not command_name:
            if input.has_option(VERSION_OPTION):
                output.write_ln(f"{self.program_name} {self.version}")
                return

            command = self.get_default_command()
        else:
            command = self._commands.get(command_name)

        if command is None:
            self._lg.info("command not found", extra={"command": command_name or ""})
            output.write_ln(f"Could not find command: {command_name or ''}")
            output.write_ln()
            return

        self._setup_command(command, input)

        if input.has_option(HELP_OPTION):
            command.help(output)
        else:
            command.execute(output)

        output.write_ln()

    def _setup_command(self, command: Command, input: ConsoleInput) -> None:
        command.set_input(input)
        command.set_application(self)

    def get_loaded_commands(self) -> dict[str, Command]:
        """All commands, keyed by name, in enumeration order."""
        return self._commands.all()

    def get_command(self, name: str) -> Command | None:
        return self._commands.get(name)

    def set_default_command(self, command: Command | str | None) -> None:
        """Set the command run when no command name is given."""
        self._commands.set_default(command)

    def get_default_command(self) -> Command | None:
        return self._commands.get_default()

    def add(self, command: Command) -> None:
        """
        Add a command.

        Raises:
            DuplicateCommandError: If the name is already registered
        """
        self._commands.add(command)

    def remove(self, name: str) -> None:
        """Remove a command; unknown names are ignored."""
        self._commands.remove(name)

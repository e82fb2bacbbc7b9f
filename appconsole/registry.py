"""
Command registration and lookup.

The registry maps case-normalized command names to command instances.
Registering a second command under an existing name is a hard failure: the
console refuses to guess which definition the user meant.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import TYPE_CHECKING

from .constants import MAX_COMMAND_NAME_LENGTH
from .exceptions import CommandRegistrationError, DuplicateCommandError

if TYPE_CHECKING:
    from .commands.base import Command

_NAME_PATTERN = re.compile(r"^[^\s]+$")

# Helper functions for CommandRegistry.add()


def _validate_command_name(command_name: str) -> None:
    """Validate command name format."""
    if not command_name:
        raise CommandRegistrationError("", "Command must have a name")

    if len(command_name) > MAX_COMMAND_NAME_LENGTH:
        raise CommandRegistrationError(
            command_name,
            f"Command name exceeds maximum length of {MAX_COMMAND_NAME_LENGTH} characters",
        )

    if not _NAME_PATTERN.match(command_name):
        raise CommandRegistrationError(
            command_name, "Command name must not contain whitespace"
        )


class CommandRegistry:
    """
    Uniquely-keyed collection of commands.

    Enumeration follows insertion order until sort() is called; the
    application sorts once after loading, giving ascending lexicographic
    order. Commands added later are appended.

    The default command is stored as a name and resolved on every
    get_default() call, so removing the default command simply leaves no
    default instead of a dangling reference.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._default_name: str | None = None

    def add(self, command: Command) -> None:
        """
        Register a command under its name.

        Args:
            command: Command instance to register

        Raises:
            CommandRegistrationError: If the name is invalid
            DuplicateCommandError: If the name is already registered
        """
        name = command.name
        _validate_command_name(name)

        if name in self._commands:
            raise DuplicateCommandError(command)

        self._commands[name] = command

    def remove(self, name: str) -> None:
        """Remove a command; unknown names are ignored."""
        self._commands.pop(name, None)

    def get(self, name: str) -> Command | None:
        """Get a command by its exact name."""
        return self._commands.get(name)

    def all(self) -> dict[str, Command]:
        """Return a copy of the name -> command mapping in enumeration order."""
        return dict(self._commands)

    def names(self) -> list[str]:
        """List registered command names in enumeration order."""
        return list(self._commands)

    def sort(self) -> None:
        """Order enumeration by ascending command name."""
        self._commands = dict(sorted(self._commands.items()))

    def set_default(self, command: Command | str | None) -> None:
        """
        Set the default command.

        Does not register the command; a default whose name is not registered
        resolves to None.

        Args:
            command: Command instance, command name, or None to clear
        """
        if command is None or isinstance(command, str):
            self._default_name = command
        else:
            self._default_name = command.name

    def get_default(self) -> Command | None:
        """Resolve the default command against the registered commands."""
        if self._default_name is None:
            return None
        return self._commands.get(self._default_name)

    @property
    def default_name(self) -> str | None:
        """Name of the default command, registered or not."""
        return self._default_name

    def clear(self) -> None:
        """Remove all commands and the default."""
        self._commands.clear()
        self._default_name = None

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

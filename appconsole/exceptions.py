"""
Exception hierarchy for the console application.

Construction-time problems (duplicate commands, broken command files, bad
configuration) are raised as ConsoleError subclasses and are meant to stop the
application before any command runs. An unknown command name at run time is
not an error and never raises.
"""

from typing import Any


class ConsoleError(Exception):
    """
    Base exception for all console application errors.

    Example:
        try:
            app = ConsoleApplication(settings)
        except ConsoleError as e:
            lg.error(f"console failed to start: {e}")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class DuplicateCommandError(ConsoleError):
    """Raised when a second command is registered under an existing name."""

    def __init__(self, command: Any) -> None:
        self.command = command
        super().__init__(f"Command '{command.name}' has more than one definition")


class CommandRegistrationError(ConsoleError):
    """Raised when a command cannot be registered."""

    def __init__(self, command_name: str, reason: str):
        self.command_name = command_name
        self.reason = reason
        super().__init__(f"Failed to register command '{command_name}': {reason}")


class CommandLoadError(ConsoleError):
    """
    Raised when a discovered command file cannot be turned into a command.

    Covers import failures, files that define no matching command type and
    command types that cannot be constructed without arguments.
    """

    def __init__(self, path: Any, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load command from '{path}': {reason}")


class UndefNameError(ConsoleError):
    """Raised when a command class does not define a name."""

    def __init__(self, cls: type | None = None) -> None:
        self.cls = cls
        if cls is not None:
            super().__init__(f"Command class {cls.__name__} must define a name")
        else:
            super().__init__("Command name is not defined")


class MissingContextError(ConsoleError):
    """Raised when a command reads its input or application before injection."""

    def __init__(self, command_name: str, attribute: str):
        self.command_name = command_name
        self.attribute = attribute
        super().__init__(
            f"Command '{command_name}' has no {attribute} yet. "
            f"The application injects it right before the command runs; "
            f"for testing, call set_{attribute}() explicitly."
        )


class ConfigError(ConsoleError):
    """
    Configuration-related errors.

    Examples:
        - Invalid YAML syntax
        - Root of the file is not a mapping
        - Configuration file exceeds the size limit
    """

    pass

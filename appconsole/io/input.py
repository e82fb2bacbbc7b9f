"""
Process argument parsing for console commands.

Options are not declared up front: every command decides which flags it
understands, so ArgvInput splits the raw arguments into positionals and
named options without a schema and commands query them by alias groups.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from typing import Any, Protocol


def _aliases(names: str | Iterable[str]) -> tuple[str, ...]:
    """Normalize an alias group; a bare string is a single alias."""
    if isinstance(names, str):
        return (names,)
    return tuple(names)


class ConsoleInput(Protocol):
    """Protocol for parsed console input."""

    def get_first_argument(self) -> str | None:
        """Return the first positional argument (the command name), if any."""
        ...

    def get_arguments(self) -> list[str]:
        """Return all positional arguments, command name included."""
        ...

    def has_option(self, names: str | Iterable[str]) -> bool:
        """Check whether any alias of an option was given."""
        ...

    def get_option(self, names: str | Iterable[str], default: Any = None) -> Any:
        """Return the value of the first given alias, or default."""
        ...


class ArgvInput:
    """
    Schema-less parser for process arguments.

    Recognized forms:
        --name          long flag, value True
        --name=value    long option with value
        -abc            short flags a, b and c, each True
        -o=value        short option with value
        --              ends option parsing; the rest is positional

    Everything else is positional. Repeating an option keeps the last value.

    Example:
        inp = ArgvInput(["generate-command", "Deploy", "--module=acme/ops", "-f"])
        inp.get_first_argument()           # "generate-command"
        inp.get_arguments()                # ["generate-command", "Deploy"]
        inp.get_option(("m", "module"))    # "acme/ops"
        inp.has_option(("f", "force"))     # True
    """

    def __init__(self, argv: Sequence[str] | None = None) -> None:
        """
        Parse arguments.

        Args:
            argv: Arguments without the program name (defaults to sys.argv[1:])
        """
        self._tokens = list(sys.argv[1:] if argv is None else argv)
        self._arguments: list[str] = []
        self._options: dict[str, Any] = {}
        self._parse()

    def _parse(self) -> None:
        tokens = iter(self._tokens)
        for token in tokens:
            if token == "--":
                self._arguments.extend(tokens)
                break
            if token.startswith("--") and len(token) > 2:
                self._parse_long(token[2:])
            elif token.startswith("-") and len(token) > 1:
                self._parse_short(token[1:])
            else:
                self._arguments.append(token)

    def _parse_long(self, body: str) -> None:
        name, sep, value = body.partition("=")
        self._options[name] = value if sep else True

    def _parse_short(self, body: str) -> None:
        name, sep, value = body.partition("=")
        if sep:
            self._options[name] = value
            return
        for flag in name:
            self._options[flag] = True

    @property
    def tokens(self) -> list[str]:
        """Raw argument tokens."""
        return list(self._tokens)

    def get_first_argument(self) -> str | None:
        """Return the first positional argument (the command name), if any."""
        return self._arguments[0] if self._arguments else None

    def get_arguments(self) -> list[str]:
        """Return all positional arguments, command name included."""
        return list(self._arguments)

    def get_argument(self, index: int, default: str | None = None) -> str | None:
        """Return the positional argument at index, or default."""
        if 0 <= index < len(self._arguments):
            return self._arguments[index]
        return default

    def get_options(self) -> dict[str, Any]:
        """Return all options as a name -> value mapping."""
        return dict(self._options)

    def has_option(self, names: str | Iterable[str]) -> bool:
        """Check whether any alias of an option was given."""
        return any(name in self._options for name in _aliases(names))

    def get_option(self, names: str | Iterable[str], default: Any = None) -> Any:
        """Return the value of the first given alias, or default."""
        for name in _aliases(names):
            if name in self._options:
                return self._options[name]
        return default

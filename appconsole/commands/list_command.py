"""List all registered commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import Command, CommandConfig

if TYPE_CHECKING:
    from ..io import OutputWriter


class ListCommand(Command):
    """Print every registered command with its description."""

    def _create_config(self) -> CommandConfig:
        return CommandConfig(
            name="list",
            description="List all available commands",
            usage="list",
        )

    def execute(self, output: OutputWriter) -> None:
        app = self.application
        commands = app.get_loaded_commands()
        default = app.get_default_command()

        output.write_ln(f"{app.program_name} {app.version}")
        output.write_ln()
        output.write_ln("Usage: <command> [options]")
        output.write_ln("Help:  <command> --help")
        output.write_ln()
        output.write_ln("Available commands:")

        width = max((len(name) for name in commands), default=0)
        for name, command in commands.items():
            marker = " (default)" if command is default else ""
            output.write_ln(f"  {name.ljust(width)}  {command.description}{marker}")

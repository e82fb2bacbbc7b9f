"""Generate a command file skeleton."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from ..constants import MODULE_COMMANDS_SUBDIR
from .base import Command, CommandConfig

if TYPE_CHECKING:
    from ..io import OutputWriter

_MODULE = ("m", "module")
_FORCE = ("f", "force")
_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")

_COMMAND_TEMPLATE = '''\
"""{description}"""

from appconsole.commands import Command, CommandConfig


class {class_name}(Command):
    """{description}"""

    def _create_config(self) -> CommandConfig:
        return CommandConfig(
            name="{name}",
            description="{description}",
        )

    def execute(self, output) -> None:
        output.write_ln("{name}: not implemented yet")
'''


def class_name_for(command_name: str) -> str:
    """Class name for a command name: "deploy-assets" -> "DeployAssetsCommand"."""
    return "".join(part.capitalize() for part in command_name.split("-")) + "Command"


def render_command(command_name: str) -> str:
    """Source code of a new command file."""
    return _COMMAND_TEMPLATE.format(
        class_name=class_name_for(command_name),
        name=command_name,
        description=f"The {command_name} command",
    )


class GenerateCommandCommand(Command):
    """
    Write a new ``<Name>Command.py`` file.

    Files go to the core commands directory, or to a module's commands
    directory with --module. Existing files are only replaced with --force.
    """

    def _create_config(self) -> CommandConfig:
        return CommandConfig(
            name="generate-command",
            description="Generate a new command file",
            usage="generate-command <name> [--module=<module_path>] [--force]",
            options=[
                ("-m, --module", "Module path to place the command in"),
                ("-f, --force", "Overwrite an existing file"),
            ],
        )

    def _target_dir(self) -> Path:
        settings = self.application.settings
        module_path = self.input.get_option(_MODULE)
        if isinstance(module_path, str) and module_path:
            return settings.modules_directory() / module_path / MODULE_COMMANDS_SUBDIR
        return settings.core_commands_dir

    def execute(self, output: OutputWriter) -> None:
        arguments = self.input.get_arguments()
        command_name = arguments[1].lower() if len(arguments) > 1 else ""

        if not _NAME_PATTERN.match(command_name):
            output.write_ln(
                "Please provide a command name made of lowercase words "
                "separated by hyphens, e.g. generate-command deploy-assets"
            )
            return

        target = self._target_dir() / f"{class_name_for(command_name)}.py"
        # Overwriting the file that defines a command keeps the name unique
        if not target.exists() and self.application.get_command(command_name):
            output.write_ln(
                f"Command '{command_name}' is already defined, choose another name"
            )
            return

        if target.exists() and not self.input.has_option(_FORCE):
            output.write_ln(f"{target} already exists, use --force to overwrite")
            return

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render_command(command_name))
        self.lg.info("command generated", extra={"path": target})
        output.write_ln(f"Generated {target}")

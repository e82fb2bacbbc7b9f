"""Generate a module skeleton with a commands directory."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..constants import MODULE_COMMANDS_SUBDIR
from .base import Command, CommandConfig

if TYPE_CHECKING:
    from ..io import OutputWriter

_PATH_PATTERN = re.compile(r"^[A-Za-z0-9_-]+(/[A-Za-z0-9_-]+)*$")


class GenerateModuleCommand(Command):
    """
    Create ``<modules_dir>/<module_path>/commands``.

    The module still has to be listed under console.module_paths before its
    commands are loaded.
    """

    def _create_config(self) -> CommandConfig:
        return CommandConfig(
            name="generate-module",
            description="Generate a module directory with a commands folder",
            usage="generate-module <vendor/module>",
        )

    def execute(self, output: OutputWriter) -> None:
        arguments = self.input.get_arguments()
        module_path = arguments[1] if len(arguments) > 1 else ""

        if not _PATH_PATTERN.match(module_path):
            output.write_ln(
                "Please provide a module path such as vendor/module "
                "(letters, digits, '_' and '-' separated by '/')"
            )
            return

        module_dir = self.application.settings.modules_directory() / module_path
        if module_dir.exists():
            output.write_ln(f"Module directory {module_dir} already exists")
            return

        (module_dir / MODULE_COMMANDS_SUBDIR).mkdir(parents=True)
        self.lg.info("module generated", extra={"path": module_dir})
        output.write_ln(f"Generated {module_dir}")
        output.write_ln(
            f"Add '{module_path}' to console.module_paths to load its commands"
        )

"""Show the effective console settings."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from .base import Command, CommandConfig

if TYPE_CHECKING:
    from ..io import OutputWriter


def _describe_dir(path: Path) -> str:
    return f"{path}" if path.is_dir() else f"{path} (missing)"


class ConfigCommand(Command):
    """Print paths and defaults the console was started with."""

    def _create_config(self) -> CommandConfig:
        return CommandConfig(
            name="config",
            description="Show console settings and command directories",
            usage="config",
        )

    def execute(self, output: OutputWriter) -> None:
        settings = self.application.settings

        output.write_ln(f"base path:        {settings.base_path}")
        output.write_ln(f"core commands:    {_describe_dir(settings.core_commands_dir)}")
        output.write_ln(f"modules dir:      {_describe_dir(settings.modules_directory())}")
        output.write_ln(f"cache dir:        {settings.cache_dir}")
        output.write_ln(f"default command:  {settings.default_command or '(none)'}")

        if settings.module_paths is None:
            output.write_ln("module paths:     (not configured)")
            return

        output.write_ln("module paths:")
        for module_path, directory in zip(
            settings.module_paths, settings.module_command_dirs()
        ):
            output.write_ln(f"  {module_path}: {_describe_dir(directory)}")

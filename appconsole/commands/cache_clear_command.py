"""Empty the application cache directory."""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

from .base import Command, CommandConfig

if TYPE_CHECKING:
    from ..io import OutputWriter

_DRY_RUN = ("n", "dry-run")


class CacheClearCommand(Command):
    """
    Remove everything inside the configured cache directory.

    The directory itself is kept. Hidden files such as .gitkeep are kept too.
    """

    def _create_config(self) -> CommandConfig:
        return CommandConfig(
            name="cache-clear",
            description="Clear the application cache directory",
            usage="cache-clear [--dry-run]",
            options=[("-n, --dry-run", "Only list what would be removed")],
        )

    def execute(self, output: OutputWriter) -> None:
        cache_dir = self.application.settings.cache_dir
        assert cache_dir is not None

        if not cache_dir.is_dir():
            output.write_ln(f"Cache directory {cache_dir} does not exist, nothing to clear")
            return

        dry_run = self.input.has_option(_DRY_RUN)
        entries = sorted(p for p in cache_dir.iterdir() if not p.name.startswith("."))
        for entry in entries:
            if dry_run:
                output.write_ln(f"would remove {entry}")
            elif entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()

        self.lg.debug(
            "cache cleared",
            extra={"dir": cache_dir, "entries": len(entries), "dry_run": dry_run},
        )
        verb = "Would remove" if dry_run else "Removed"
        output.write_ln(f"{verb} {len(entries)} entries from {cache_dir}")

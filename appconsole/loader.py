"""
Command discovery.

The loader fills a CommandRegistry in a fixed precedence order:

1. built-in commands shipped with the package
2. command files under <base_path>/application/commands
3. command files under <modules_dir>/<module_path>/commands, per module

A command file is any ``.py`` file whose base name ends in ``command`` (compared
case-insensitively), found by a recursive walk. Its base name without the
extension is the command type name, matched case-insensitively against the
command classes the file defines. A directory that does not exist
contributes nothing; every other failure aborts loading.
"""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import os
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

from .commands.base import Command, CommandFactory, forget_module, get_factory
from .config import ConsoleSettings
from .constants import COMMAND_FILE_SUFFIX
from .exceptions import CommandLoadError
from .log import LoggerFactory
from .registry import CommandRegistry

# Helper functions for CommandLoader.load_directory()


def _raise_walk_error(error: OSError) -> None:
    """os.walk error hook: directory read failures are fatal."""
    raise error


def _derive_type_name(path: Path) -> str:
    """Command type name for a file: its base name without the extension."""
    return path.name[: -len(path.suffix)] if path.suffix else path.name


def _module_name_for(path: Path) -> str:
    """Unique, stable module name for a command file outside any package."""
    digest = hashlib.sha1(str(path.resolve()).encode()).hexdigest()[:16]
    return f"_appconsole_command_{digest}_{_derive_type_name(path).lower()}"


@dataclass(frozen=True)
class CommandSource:
    """
    A directory scanned for command files.

    Attributes:
        directory: Root of the recursive scan
        suffix: File name suffix marking command files (case-insensitive)
    """

    directory: Path
    suffix: str = COMMAND_FILE_SUFFIX

    def matches(self, file_name: str) -> bool:
        """
        Check whether a file name follows the command file convention.

        The part before the extension matches case-insensitively; the
        extension must match exactly, so "NotesCommand.PY" is not a command
        file.
        """
        stem_suffix, extension = os.path.splitext(self.suffix)
        stem, file_extension = os.path.splitext(file_name)
        return file_extension == extension and stem.lower().endswith(
            stem_suffix.lower()
        )

    def type_name(self, path: Path) -> str:
        """Command type name derived from a command file path."""
        return _derive_type_name(path)

    def iter_files(self) -> Iterator[Path]:
        """
        Yield matching files in a deterministic, sorted order.

        Yields nothing when the directory does not exist.

        Raises:
            OSError: If an existing directory cannot be read
        """
        if not self.directory.is_dir():
            return
        for dirpath, dirnames, filenames in os.walk(
            self.directory, onerror=_raise_walk_error
        ):
            dirnames.sort()
            for file_name in sorted(filenames):
                if self.matches(file_name):
                    yield Path(dirpath) / file_name


class CommandLoader:
    """
    Turns built-in command types and command directories into registered commands.

    Example:
        registry = CommandRegistry()
        loader = CommandLoader(ConsoleSettings(base_path=Path("/srv/shop")))
        loader.load_all(registry)
    """

    def __init__(
        self,
        settings: ConsoleSettings,
        builtins: Iterable[CommandFactory] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Initialize the loader.

        Args:
            settings: Paths to scan
            builtins: Zero-argument factories of built-in commands
                (defaults to the package's built-in commands)
            logger: Logger (defaults to the "loader" logger)
        """
        if builtins is None:
            from .commands import BUILTIN_COMMANDS

            builtins = BUILTIN_COMMANDS
        self._settings = settings
        self._builtins = list(builtins)
        self._lg = logger or LoggerFactory.create("loader")

    @property
    def settings(self) -> ConsoleSettings:
        return self._settings

    def sources(self) -> list[CommandSource]:
        """Command directories in precedence order: core first, then modules."""
        sources = [CommandSource(self._settings.core_commands_dir)]
        sources.extend(CommandSource(d) for d in self._settings.module_command_dirs())
        return sources

    def load_all(self, registry: CommandRegistry) -> int:
        """
        Load built-in, core and module commands into the registry.

        Returns:
            Number of commands added

        Raises:
            DuplicateCommandError: If two commands share a name
            CommandLoadError: If a command file cannot be turned into a command
            OSError: If an existing directory cannot be read
        """
        count = self.load_builtins(registry)
        if self._settings.module_paths is None:
            self._lg.debug("no module paths configured, skipping module commands")
        for source in self.sources():
            count += self.load_directory(registry, source.directory)
        self._lg.debug("commands loaded", extra={"count": count})
        return count

    def load_builtins(self, registry: CommandRegistry) -> int:
        """Instantiate and register the built-in commands."""
        for factory in self._builtins:
            registry.add(factory())
        return len(self._builtins)

    def load_directory(self, registry: CommandRegistry, directory: Path) -> int:
        """
        Load all command files found under a directory.

        Args:
            registry: Registry receiving the commands
            directory: Directory to scan recursively; may not exist

        Returns:
            Number of commands added
        """
        source = CommandSource(Path(directory))
        if not source.directory.is_dir():
            self._lg.debug("skipping missing directory", extra={"path": directory})
            return 0

        self._lg.debug("scanning directory", extra={"path": directory})
        count = 0
        for path in source.iter_files():
            command = self.load_file(path, source.type_name(path))
            registry.add(command)
            self._lg.debug(
                "registered command", extra={"command": command.name, "path": path}
            )
            count += 1
        return count

    def load_file(self, path: Path, type_name: str | None = None) -> Command:
        """
        Import a command file and construct its command.

        Args:
            path: Command file
            type_name: Command type to construct (defaults to the file's base name)

        Returns:
            New command instance

        Raises:
            CommandLoadError: If the file cannot be imported, defines no
                matching command type, or the type needs constructor arguments
        """
        type_name = type_name or _derive_type_name(path)
        module = self._import_file(path)

        factory = get_factory(module.__name__, type_name)
        if factory is None:
            raise CommandLoadError(
                path, f"file defines no command type named '{type_name}'"
            )

        try:
            command = factory()
        except TypeError as e:
            raise CommandLoadError(
                path, f"'{type_name}' cannot be constructed without arguments: {e}"
            ) from e

        if not isinstance(command, Command):
            raise CommandLoadError(path, f"'{type_name}' is not a Command")
        return command

    def _import_file(self, path: Path) -> ModuleType:
        """Import a file once per process, like a require_once."""
        module_name = _module_name_for(path)
        if module_name in sys.modules:
            return sys.modules[module_name]

        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise CommandLoadError(path, "not an importable Python file")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except OSError:
            self._discard(module_name)
            raise
        except Exception as e:
            self._discard(module_name)
            raise CommandLoadError(path, f"import failed: {e}") from e
        return module

    @staticmethod
    def _discard(module_name: str) -> None:
        sys.modules.pop(module_name, None)
        forget_module(module_name)

"""
Pytest configuration and shared fixtures.

This module provides custom markers and shared fixtures for the console test
suite: temporary directories, command file writers and recording commands.
"""

import logging
import shutil
import tempfile
import textwrap
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from appconsole.commands.base import Command, CommandConfig
from appconsole.config import ConsoleSettings
from appconsole.log import ROOT_LOGGER_NAME

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (filesystem discovery, full application)"
    )


# =============================================================================
# Shared Commands
# =============================================================================


class RecordingCommand(Command):
    """Command recording which behavior the application invoked."""

    def __init__(self, name: str = "record", description: str = "Records calls"):
        super().__init__(CommandConfig(name=name, description=description))
        self.calls: list[str] = []

    def execute(self, output) -> None:
        self.calls.append("execute")
        output.write_ln(f"{self.name} executed")

    def help(self, output) -> None:
        self.calls.append("help")
        output.write_ln(f"{self.name} help")


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Provide a temporary directory that is cleaned up after the test.

    Yields:
        Path: Temporary directory path
    """
    temp_path = Path(tempfile.mkdtemp(prefix="appconsole-test-"))
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def settings(temp_dir: Path) -> ConsoleSettings:
    """Settings rooted at an empty temporary directory, no modules configured."""
    return ConsoleSettings(base_path=temp_dir)


@pytest.fixture
def core_commands_dir(settings: ConsoleSettings) -> Path:
    """Created core commands directory of the temporary application."""
    directory = settings.core_commands_dir
    directory.mkdir(parents=True)
    return directory


@pytest.fixture
def write_command() -> Callable[..., Path]:
    """
    Provide a writer for command files.

    Returns:
        Callable(directory, file_name, class_name, command_name) -> Path
    """

    def _write(
        directory: Path,
        file_name: str,
        class_name: str | None = None,
        command_name: str | None = None,
    ) -> Path:
        class_name = class_name or file_name[: -len(".py")]
        command_name = command_name or class_name.lower().removesuffix("command")
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / file_name
        path.write_text(
            textwrap.dedent(
                f'''\
                from appconsole.commands import Command, CommandConfig


                class {class_name}(Command):
                    def _create_config(self):
                        return CommandConfig(name="{command_name}", description="{class_name}")

                    def execute(self, output):
                        output.write_ln("{command_name} ran")
                '''
            )
        )
        return path

    return _write


@pytest.fixture
def recording_command() -> RecordingCommand:
    """Provide a fresh recording command named "record"."""
    return RecordingCommand()


@pytest.fixture(autouse=True)
def _reset_console_logger() -> Generator[None, None, None]:
    """Drop handlers installed on the appconsole logger during a test."""
    yield
    lg = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
    lg.setLevel(logging.NOTSET)
    lg.propagate = True

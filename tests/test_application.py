"""
Tests for application.py.

Tests key functionality including:
- Construction: loading, default command resolution, sorting
- Dispatch: explicit name, default, version, help, not found
- Trailing blank line on every command run
- Command add/remove through the application
"""

from unittest.mock import Mock, call

import pytest
from conftest import RecordingCommand

import appconsole
from appconsole.application import ConsoleApplication
from appconsole.config import ConsoleSettings
from appconsole.exceptions import DuplicateCommandError
from appconsole.io import ArgvInput, BufferedOutput
from appconsole.loader import CommandLoader


def _app(settings, *commands, default=None):
    """Application whose only commands are the given ones."""
    loader = CommandLoader(settings, builtins=[lambda c=c: c for c in commands])
    return ConsoleApplication(settings, default_command_name=default, loader=loader)


# =============================================================================
# Construction
# =============================================================================


@pytest.mark.integration
class TestConstruction:
    """Test ConsoleApplication construction."""

    def test_builtins_are_loaded(self, settings):
        """Test the built-in commands always exist."""
        app = ConsoleApplication(settings)

        assert set(app.get_loaded_commands()) >= {
            "cache-clear",
            "config",
            "generate-command",
            "generate-module",
            "list",
        }

    def test_commands_enumerate_sorted(self, settings, core_commands_dir, write_command):
        """Test enumeration is lexicographic regardless of load order."""
        write_command(core_commands_dir, "AaaCommand.py")
        write_command(core_commands_dir, "ZzzCommand.py")

        names = list(ConsoleApplication(settings).get_loaded_commands())

        assert names == sorted(names)
        assert names[0] == "aaa"
        assert names[-1] == "zzz"

    def test_default_command_is_list(self, settings):
        """Test the configured default resolves to the list command."""
        app = ConsoleApplication(settings)

        assert app.get_default_command() is app.get_command("list")

    def test_unresolvable_default_leaves_none(self, settings):
        """Test a default name missing from the registry is not set."""
        app = ConsoleApplication(settings, default_command_name="ghost")

        assert app.get_default_command() is None

    def test_duplicate_aborts_construction(self, settings, core_commands_dir, write_command):
        """Test construction fails on a name collision."""
        write_command(core_commands_dir, "ListCommand.py")

        with pytest.raises(DuplicateCommandError):
            ConsoleApplication(settings)

    def test_add_and_remove(self, settings, recording_command):
        """Test commands can be added and removed after construction."""
        app = _app(settings)

        app.add(recording_command)
        assert app.get_command("record") is recording_command
        with pytest.raises(DuplicateCommandError):
            app.add(RecordingCommand("record"))

        app.remove("record")
        app.remove("record")
        assert app.get_command("record") is None


# =============================================================================
# Dispatch
# =============================================================================


@pytest.mark.unit
class TestRun:
    """Test ConsoleApplication.run dispatch."""

    def test_runs_named_command(self, settings):
        """Test the first positional argument selects the command."""
        command = RecordingCommand("deploy")
        out = BufferedOutput()

        _app(settings, command).run(ArgvInput(["deploy"]), out)

        assert command.calls == ["execute"]
        assert out.lines == ["deploy executed", ""]

    def test_runs_default_without_arguments(self, settings):
        """Test the default command runs when no name is given."""
        command = RecordingCommand("list")
        out = BufferedOutput()

        _app(settings, command, default="list").run(ArgvInput([]), out)

        assert command.calls == ["execute"]

    def test_version_flag_without_command(self, settings):
        """Test --version prints one line and runs nothing."""
        command = RecordingCommand("list")
        app = _app(settings, command, default="list")

        for flag in ("--version", "-v"):
            out = BufferedOutput()
            app.run(ArgvInput([flag]), out)

            assert out.lines == [f"App Console {app.version}"]
            assert appconsole.__version__ in out.lines[0]
        assert command.calls == []

    def test_version_flag_ignored_with_command(self, settings):
        """Test --version only applies when no command is named."""
        command = RecordingCommand("deploy")

        _app(settings, command).run(ArgvInput(["deploy", "-v"]), BufferedOutput())

        assert command.calls == ["execute"]

    def test_unknown_command(self, settings):
        """Test unknown names are reported, not raised."""
        command = RecordingCommand("deploy")
        out = BufferedOutput()

        _app(settings, command).run(ArgvInput(["ghost"]), out)

        assert out.lines == ["Could not find command: ghost", ""]
        assert command.calls == []

    def test_no_command_and_no_default(self, settings):
        """Test a missing default falls through to the not-found message."""
        out = BufferedOutput()

        _app(settings, RecordingCommand("deploy"), default="ghost").run(ArgvInput([]), out)

        assert out.lines == ["Could not find command: ", ""]

    def test_lookup_is_exact(self, settings):
        """Test names are matched as given."""
        out = BufferedOutput()

        _app(settings, RecordingCommand("deploy")).run(ArgvInput(["Deploy"]), out)

        assert out.lines[0] == "Could not find command: Deploy"

    @pytest.mark.parametrize("flag", ["--help", "-h"])
    def test_help_flag_runs_help(self, settings, flag):
        """Test the help flag invokes help instead of execute."""
        command = RecordingCommand("deploy")
        out = BufferedOutput()

        _app(settings, command).run(ArgvInput(["deploy", flag]), out)

        assert command.calls == ["help"]
        assert out.lines == ["deploy help", ""]

    def test_help_flag_applies_to_default(self, settings):
        """Test --help without a name shows the default command's help."""
        command = RecordingCommand("list")

        _app(settings, command, default="list").run(ArgvInput(["--help"]), BufferedOutput())

        assert command.calls == ["help"]

    def test_input_and_application_are_injected(self, settings):
        """Test the command sees the current input and application."""
        command = RecordingCommand("deploy")
        app = _app(settings, command)
        inp = ArgvInput(["deploy", "--target=prod"])

        app.run(inp, BufferedOutput())

        assert command.input is inp
        assert command.application is app
        assert command.input.get_option("target") == "prod"

    def test_exactly_one_trailing_blank_line(self, settings):
        """Test the trailing blank line is written once after the command."""
        output = Mock()
        command = RecordingCommand("deploy")

        _app(settings, command).run(ArgvInput(["deploy"]), output)

        assert output.write_ln.call_args_list[-1] == call()
        assert output.write_ln.call_args_list.count(call()) == 1

    def test_command_errors_propagate(self, settings):
        """Test exceptions raised by a command are not swallowed."""
        command = RecordingCommand("deploy")
        command.execute = Mock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            _app(settings, command).run(ArgvInput(["deploy"]), BufferedOutput())

    def test_default_settings_are_used(self, monkeypatch, temp_dir):
        """Test settings default to the working directory."""
        monkeypatch.chdir(temp_dir)

        app = ConsoleApplication()

        assert app.settings.base_path.resolve() == temp_dir.resolve()
        assert isinstance(app.settings, ConsoleSettings)

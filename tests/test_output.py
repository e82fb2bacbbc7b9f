"""Tests for io/output.py."""

import io

import pytest

from appconsole.io import BufferedOutput, ConsoleOutput


@pytest.mark.unit
class TestConsoleOutput:
    """Tests for ConsoleOutput class."""

    def test_write_to_stdout_by_default(self, capsys):
        """Test that ConsoleOutput writes to stdout by default."""
        out = ConsoleOutput()
        out.write_ln("Hello")
        out.write_ln("World")

        captured = capsys.readouterr()
        assert captured.out == "Hello\nWorld\n"

    def test_write_ln_without_text(self, capsys):
        """Test write_ln() produces a bare newline."""
        out = ConsoleOutput()
        out.write_ln()

        assert capsys.readouterr().out == "\n"

    def test_custom_stream(self):
        """Test lines go to the given stream."""
        buffer = io.StringIO()
        out = ConsoleOutput(buffer)
        out.write_ln("Hello")
        out.write_ln()

        assert buffer.getvalue() == "Hello\n\n"


@pytest.mark.unit
class TestBufferedOutput:
    """Tests for BufferedOutput class."""

    def test_captures_lines(self):
        out = BufferedOutput()
        out.write_ln("Line 1")
        out.write_ln()

        assert out.lines == ["Line 1", ""]

    def test_lines_is_a_copy(self):
        out = BufferedOutput()
        out.write_ln("x")
        out.lines.append("y")

        assert out.lines == ["x"]

    def test_empty(self):
        assert BufferedOutput().lines == []

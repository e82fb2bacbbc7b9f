"""Tests for log.py."""

import io
import logging

import pytest

from appconsole.exceptions import ConfigError
from appconsole.log import LogConfig, LoggerFactory


@pytest.mark.unit
class TestLogConfig:
    """Tests for LogConfig."""

    @pytest.mark.parametrize(
        "level,expected",
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("warning", logging.WARNING),
            ("10", 10),
            (logging.ERROR, logging.ERROR),
            (False, False),
            ("false", False),
        ],
    )
    def test_level_resolution(self, level, expected):
        """Test level names, numbers and False resolve."""
        assert LogConfig.from_params(level).level == expected

    def test_unknown_level_raises(self):
        """Test unknown level names are configuration errors."""
        with pytest.raises(ConfigError):
            LogConfig.from_params("chatty")

    def test_from_config(self):
        """Test reading the logging section."""
        config = LogConfig.from_config(
            {"logging": {"level": "debug", "micros": True, "colors": True}}
        )

        assert config == LogConfig(level=logging.DEBUG, micros=True, colors=True)

    def test_from_config_missing_section(self):
        """Test defaults for a missing section."""
        assert LogConfig.from_config({}).level == logging.WARNING


@pytest.mark.unit
class TestLoggerFactory:
    """Tests for LoggerFactory."""

    def test_names_are_qualified(self):
        """Test loggers live under the appconsole hierarchy."""
        assert LoggerFactory.create("loader").name == "appconsole.loader"
        assert LoggerFactory.create("/commands/list").name == "appconsole.commands.list"
        assert LoggerFactory.create("/").name == "appconsole"

    def test_format_with_extra(self):
        """Test records render level, message, sorted extras, pid and name."""
        stream = io.StringIO()
        LoggerFactory.create_root(LogConfig.from_params("debug"), stream=stream)

        LoggerFactory.create("loader").debug(
            "scanning directory", extra={"path": "/srv", "count": 2}
        )

        line = stream.getvalue().strip()
        assert "[D] scanning directory [count:2] [path:/srv]" in line
        assert line.endswith("[appconsole.loader]")

    def test_level_filters(self):
        """Test records below the configured level are dropped."""
        stream = io.StringIO()
        LoggerFactory.create_root(LogConfig.from_params("warning"), stream=stream)

        LoggerFactory.create("loader").info("hidden")

        assert stream.getvalue() == ""

    def test_disabled_logging(self):
        """Test level False silences everything."""
        stream = io.StringIO()
        LoggerFactory.create_root(LogConfig.from_params(False), stream=stream)

        LoggerFactory.create("loader").error("hidden")

        assert stream.getvalue() == ""

    def test_reconfigure_does_not_duplicate_handlers(self):
        """Test repeated configuration keeps a single handler."""
        LoggerFactory.create_root(LogConfig.from_params("info"))
        lg = LoggerFactory.create_root(LogConfig.from_params("info"))

        assert len(lg.handlers) == 1

    def test_colors(self):
        """Test colored output wraps the line in ANSI codes."""
        stream = io.StringIO()
        LoggerFactory.create_root(LogConfig.from_params("info", colors=True), stream=stream)

        LoggerFactory.create("x").info("hi")

        assert stream.getvalue().startswith("\x1b[36m")
        assert stream.getvalue().rstrip("\n").endswith("\x1b[0m")

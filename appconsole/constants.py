"""
Console-wide constants: naming conventions, resource limits and default paths.
"""

# Command files are discovered by suffix, compared case-insensitively
COMMAND_FILE_SUFFIX = "command.py"

# Relative location of the core commands directory under the base path
CORE_COMMANDS_SUBDIR = ("application", "commands")

# Every module contributes commands from <modules_dir>/<module_path>/<this>
MODULE_COMMANDS_SUBDIR = "commands"

# Name of the command run when no command name is given
DEFAULT_COMMAND_NAME = "list"

DEFAULT_PROGRAM_NAME = "App Console"

# Resource limits
MAX_COMMAND_NAME_LENGTH = 255  # Maximum length for command names
MAX_CONFIG_SIZE_BYTES = 10 * 1024 * 1024  # Maximum config file size (10MB)

# Alias groups queried by the dispatcher
VERSION_OPTION = ("v", "version")
HELP_OPTION = ("h", "help")

# Default config location, relative to the working directory
DEFAULT_CONFIG_FILE = "etc/console.yaml"
ENV_PREFIX = "APPCONSOLE_"

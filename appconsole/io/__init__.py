"""
Input and output collaborators for console commands.

Commands read the parsed process arguments through a ConsoleInput and write
user-facing text through an OutputWriter, so both can be swapped in tests.
"""

from .input import ArgvInput, ConsoleInput
from .output import BufferedOutput, ConsoleOutput, OutputWriter

__all__ = [
    "ArgvInput",
    "ConsoleInput",
    "OutputWriter",
    "ConsoleOutput",
    "BufferedOutput",
]

"""
Command Dispatcher

The single entry point for command lines. It records each line in the
System Log, parses it and hands it to the built-in commands. Nothing
raised by a command escapes ``execute``.

Author: YSNRFD
Version: 1.0.0
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .parser import CommandParser
from .builtins import BuiltinCommands
from simpleos.logger import get_logger

if TYPE_CHECKING:
    from simpleos.core.kernel import Kernel


class CommandDispatcher:
    """
    Turns raw command lines into command output.

    Not re-entrant: callers must submit one line at a time.

    Example:
        >>> dispatcher = CommandDispatcher(kernel)
        >>> dispatcher.execute("echo hello   world")
        'hello world'
    """

    def __init__(self, kernel: Kernel):
        self._kernel = kernel
        self._logger = get_logger('dispatcher')
        self._parser = CommandParser()
        self._builtins = BuiltinCommands(kernel)

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def builtins(self) -> BuiltinCommands:
        return self._builtins

    def execute(self, line: str) -> str:
        """
        Execute one command line.

        Args:
            line: Raw command line

        Returns:
            Command output, possibly empty or multi-line
        """
        if not line or not line.strip():
            return ""

        self._kernel.system_log.info(f"Executing: {line}")

        cmd = self._parser.parse(line)
        if cmd is None:
            return ""

        if not self._builtins.is_builtin(cmd.command):
            self._logger.debug("Unknown command", context={'command': cmd.command})
            return f"{cmd.command}: command not found"

        return self._builtins.execute(cmd.command, cmd.args)

"""
Command Parser Module

Splits a raw command line into a command name and arguments.

The command language has no quoting, pipes or redirection: tokens are
separated by runs of whitespace and the command name is case-insensitive.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Optional, List


@dataclass
class ParsedCommand:
    """A parsed command line."""
    command: str
    args: List[str] = field(default_factory=list)
    raw: str = ""


class CommandParser:
    """
    Parses shell command lines.

    Example:
        >>> parser = CommandParser()
        >>> cmd = parser.parse("WRITE todo.txt buy milk")
        >>> cmd.command, cmd.args
        ('write', ['todo.txt', 'buy', 'milk'])
    """

    def parse(self, line: str) -> Optional[ParsedCommand]:
        """
        Parse a command line.

        Returns:
            ParsedCommand, or None for blank input
        """
        tokens = line.split()

        if not tokens:
            return None

        return ParsedCommand(
            command=tokens[0].lower(),
            args=tokens[1:],
            raw=line.strip()
        )

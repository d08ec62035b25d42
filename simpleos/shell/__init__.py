"""
SimpleOS Shell Module

Provides the command layer:
- Command parsing
- Built-in commands
- Command dispatch
- The interactive terminal loop
"""

from .parser import CommandParser, ParsedCommand
from .builtins import BuiltinCommands, CLEAR_SENTINEL, HELP_TEXT
from .dispatcher import CommandDispatcher
from .shell import Shell

__all__ = [
    'CommandParser',
    'ParsedCommand',
    'BuiltinCommands',
    'CLEAR_SENTINEL',
    'HELP_TEXT',
    'CommandDispatcher',
    'Shell',
]

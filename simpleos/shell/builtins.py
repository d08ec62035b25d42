"""
Shell Built-in Commands

Implements the commands understood by the dispatcher. Every command
returns its output as a string; failures are reported as
``<cmd>: <detail>`` text and leave the session unchanged.

Author: YSNRFD
Version: 1.0.0
"""

from __future__ import annotations

import re
import time
from typing import Callable, List, TYPE_CHECKING

from simpleos.core.session import format_uptime
from simpleos.filesystem.node import Directory
from simpleos.filesystem.path_resolver import PathResolver
from simpleos.exceptions import (
    FileSystemException,
    FileNotFoundError,
    FileExistsError,
    IsADirectoryError,
    NotADirectoryError,
    InvalidPidError,
    ProcessNotFoundError,
    ProtectedProcessError,
)
from simpleos.logger import get_logger

if TYPE_CHECKING:
    from simpleos.core.kernel import Kernel


CLEAR_SENTINEL = "__CLEAR__"

HELP_TEXT = "\n".join([
    "Available commands:",
    "  help                 - Show this help",
    "  echo [text]          - Print text to console",
    "  ls [directory]       - List files in directory",
    "  cd [directory]       - Change directory",
    "  pwd                  - Print working directory",
    "  cat [file]           - Show file contents",
    "  mkdir [directory]    - Create a new directory",
    "  touch [file]         - Create an empty file",
    "  rm [file/directory]  - Remove file or directory",
    "  write [file] [text]  - Write text to file",
    "  ps                   - List running processes",
    "  kill [pid]           - Kill a process",
    "  whoami               - Display current user",
    "  date                 - Display current date/time",
    "  uptime               - Show system uptime",
    "  clear                - Clear the screen",
    "  shutdown             - Shut down the system",
])

PS_HEADER = "PID  USER     STATUS    STARTED             COMMAND"
PID_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)


class BuiltinCommands:
    """
    Built-in shell commands.

    Commands read and mutate the kernel's session state, filesystem tree
    and process table. They are looked up by lower-case name.
    """

    def __init__(self, kernel: Kernel):
        """
        Initialize built-in commands.

        Args:
            kernel: The kernel whose state the commands operate on
        """
        self._kernel = kernel
        self._logger = get_logger('builtins')
        self._commands: dict[str, Callable[[List[str]], str]] = {
            'help': self.cmd_help,
            'echo': self.cmd_echo,
            'ls': self.cmd_ls,
            'cd': self.cmd_cd,
            'pwd': self.cmd_pwd,
            'cat': self.cmd_cat,
            'mkdir': self.cmd_mkdir,
            'touch': self.cmd_touch,
            'rm': self.cmd_rm,
            'write': self.cmd_write,
            'ps': self.cmd_ps,
            'kill': self.cmd_kill,
            'whoami': self.cmd_whoami,
            'date': self.cmd_date,
            'uptime': self.cmd_uptime,
            'clear': self.cmd_clear,
            'shutdown': self.cmd_shutdown,
        }

    def get_commands(self) -> dict[str, Callable[[List[str]], str]]:
        """Get all built-in commands."""
        return self._commands

    def is_builtin(self, name: str) -> bool:
        """Check if a command is built-in."""
        return name in self._commands

    def execute(self, name: str, args: List[str]) -> str:
        """
        Execute a built-in command.

        Args:
            name: Command name
            args: Command arguments

        Returns:
            Command output
        """
        cmd = self._commands.get(name)
        if cmd is None:
            return f"{name}: command not found"

        try:
            return cmd(args)
        except Exception as e:
            self._logger.exception(
                f"Command '{name}' failed",
                exc=e,
                context={'args': ' '.join(args)}
            )
            return f"{name}: {e}"

    @property
    def _cwd(self) -> str:
        return self._kernel.session.current_directory

    # Command implementations

    def cmd_help(self, args: List[str]) -> str:
        """Display help information."""
        return HELP_TEXT

    def cmd_echo(self, args: List[str]) -> str:
        """Echo arguments."""
        return ' '.join(args)

    def cmd_ls(self, args: List[str]) -> str:
        """List directory contents."""
        target = args[0] if args else self._cwd

        try:
            entries = self._kernel.filesystem.list_directory(target, self._cwd)
        except FileNotFoundError:
            return f"ls: cannot access '{target}': No such file or directory"
        except NotADirectoryError:
            return f"ls: cannot list '{target}': Not a directory"

        lines = []
        for name, node in entries:
            if isinstance(node, Directory):
                lines.append(f"[DIR] {name}/")
            else:
                lines.append(name)

        return '\n'.join(lines)

    def cmd_cd(self, args: List[str]) -> str:
        """Change directory."""
        session = self._kernel.session
        fs = self._kernel.filesystem

        if not args:
            target = session.home_directory
        elif args[0] == '..':
            session.current_directory = PathResolver.parent_of_cwd(self._cwd)
            return ""
        else:
            target = args[0]

        node = fs.resolve(target, self._cwd)

        if node is None:
            return f"cd: {target}: No such file or directory"

        if not isinstance(node, Directory):
            return f"cd: {target}: Not a directory"

        session.current_directory = PathResolver.to_absolute(
            PathResolver.resolve(target, self._cwd)
        )
        return ""

    def cmd_pwd(self, args: List[str]) -> str:
        """Print working directory."""
        return self._cwd

    def cmd_cat(self, args: List[str]) -> str:
        """Display file contents."""
        if not args:
            return "cat: missing file operand"

        path = args[0]

        try:
            return self._kernel.filesystem.read_file(path, self._cwd)
        except FileNotFoundError:
            return f"cat: {path}: No such file or directory"
        except IsADirectoryError:
            return f"cat: {path}: Is a directory"

    def cmd_mkdir(self, args: List[str]) -> str:
        """Create directory."""
        if not args:
            return "mkdir: missing operand"

        path = args[0]

        try:
            self._kernel.filesystem.make_directory(path, self._cwd)
        except FileExistsError:
            return f"mkdir: cannot create directory '{path}': File exists"
        except (FileNotFoundError, NotADirectoryError):
            return f"mkdir: cannot create directory '{path}': No such file or directory"

        return ""

    def cmd_touch(self, args: List[str]) -> str:
        """Create an empty file if it does not exist."""
        if not args:
            return "touch: missing file operand"

        path = args[0]

        try:
            self._kernel.filesystem.touch(path, self._cwd)
        except (FileNotFoundError, NotADirectoryError):
            return f"touch: cannot touch '{path}': No such file or directory"

        return ""

    def cmd_rm(self, args: List[str]) -> str:
        """Remove a file or a directory with everything in it."""
        if not args:
            return "rm: missing operand"

        path = args[0]
        fs = self._kernel.filesystem

        try:
            fs.delete(path, self._cwd)
        except FileNotFoundError:
            return f"rm: cannot remove '{path}': No such file or directory"

        # The working directory may have been inside the removed subtree
        if not fs.is_directory(self._cwd):
            fallback = PathResolver.to_absolute(fs.resolve_deepest(self._cwd).components)
            self._logger.notice(
                "Working directory removed",
                context={'cwd': self._cwd, 'fallback': fallback}
            )
            self._kernel.session.current_directory = fallback

        return ""

    def cmd_write(self, args: List[str]) -> str:
        """Overwrite or create a file with the remaining arguments."""
        if len(args) < 2:
            return "write: missing file operand or content"

        path = args[0]
        content = ' '.join(args[1:])

        try:
            self._kernel.filesystem.write_file(path, content, self._cwd)
        except IsADirectoryError:
            return f"write: cannot write to '{path}': Is a directory"
        except FileSystemException:
            return f"write: cannot write to '{path}': No such directory"

        return ""

    def cmd_ps(self, args: List[str]) -> str:
        """List processes."""
        lines = [PS_HEADER]

        for proc in self._kernel.process_table.list_processes():
            started = proc.started.strftime('%Y-%m-%d %H:%M:%S')
            lines.append(
                f"{str(proc.pid):<4} {proc.user:<8} {proc.status.value:<9} "
                f"{started} {proc.name}"
            )

        return '\n'.join(lines)

    def cmd_kill(self, args: List[str]) -> str:
        """Terminate a process."""
        if not args:
            return "kill: missing PID operand"

        try:
            pid = self._parse_pid(args[0])
            self._kernel.process_table.terminate(pid)
        except InvalidPidError:
            return f"kill: invalid PID: {args[0]}"
        except ProtectedProcessError:
            return "kill: cannot kill init process"
        except ProcessNotFoundError as e:
            return f"kill: no process with PID {e.pid}"

        return f"Process with PID {pid} terminated"

    @staticmethod
    def _parse_pid(value: str) -> int:
        if not PID_PATTERN.fullmatch(value):
            raise InvalidPidError(value)
        return int(value)

    def cmd_whoami(self, args: List[str]) -> str:
        """Display current username."""
        return self._kernel.session.current_user

    def cmd_date(self, args: List[str]) -> str:
        """Display current date and time."""
        return time.strftime('%a %b %d %H:%M:%S %Z %Y')

    def cmd_uptime(self, args: List[str]) -> str:
        """Display system uptime."""
        return f"Uptime: {format_uptime(self._kernel.session.uptime)}"

    def cmd_clear(self, args: List[str]) -> str:
        """Ask the terminal layer to clear the screen."""
        return CLEAR_SENTINEL

    def cmd_shutdown(self, args: List[str]) -> str:
        """Stop accepting commands."""
        self._kernel.session.running = False
        self._kernel.system_log.info("System shutdown requested")
        return "System is shutting down..."

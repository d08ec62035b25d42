"""
SimpleOS Shell Module

The interactive terminal in front of the kernel. It only reads lines,
prints results and handles the clear-screen marker; every command is
implemented behind ``Kernel.execute``.

Author: YSNRFD
Version: 1.0.0
"""

from __future__ import annotations

import sys
from typing import Optional, List, TextIO, TYPE_CHECKING

from .builtins import CLEAR_SENTINEL
from simpleos.logger import get_logger

if TYPE_CHECKING:
    from simpleos.core.kernel import Kernel


CLEAR_SCREEN = "\033[2J\033[H"
SHUTDOWN_MESSAGE = "System has been shut down."


class Shell:
    """
    SimpleOS Interactive Shell.

    Example:
        >>> shell = Shell(kernel)
        >>> shell.run()
    """

    def __init__(self, kernel: Kernel, output: Optional[TextIO] = None):
        self._kernel = kernel
        self._output = output or sys.stdout
        self._logger = get_logger('shell')
        self._prompt = kernel.config.shell.prompt

    @property
    def kernel(self) -> Kernel:
        return self._kernel

    def _write(self, text: str) -> None:
        self._output.write(text)
        self._output.flush()

    def display(self, result: str) -> None:
        """Render one command result."""
        if result == CLEAR_SENTINEL:
            self._write(CLEAR_SCREEN)
        elif result:
            self._write(result + "\n")

    def run(self, banner: Optional[str] = None) -> None:
        """
        Run the read-eval loop until shutdown or end of input.

        Args:
            banner: Text printed before the first prompt
        """
        if banner:
            self._write(banner + "\n")

        while self._kernel.is_running():
            try:
                line = input(self._prompt)
            except EOFError:
                self._write("\n")
                break
            except KeyboardInterrupt:
                self._write("^C\n")
                continue

            self.display(self._kernel.execute(line))

        if not self._kernel.is_running():
            self._write(SHUTDOWN_MESSAGE + "\n")

        self._logger.debug("Shell loop finished")

    def run_script(self, script: str) -> List[str]:
        """
        Execute each non-empty line of a script.

        Lines starting with ``#`` are skipped. Execution stops after a
        ``shutdown``.

        Returns:
            The output of every executed line
        """
        outputs = []

        for line in script.splitlines():
            line = line.strip()
            if not line or line.startswith('#'):
                continue

            result = self._kernel.execute(line)
            outputs.append(result)
            self.display(result)

            if not self._kernel.is_running():
                break

        return outputs

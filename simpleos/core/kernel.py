"""
SimpleOS Kernel

The session context object. A kernel owns every piece of mutable state
in the simulation:
- Session state (working directory, user, uptime, running flag)
- The filesystem tree
- The process table
- The System Log
- The event loop that reaps killed processes

and exposes the three calls the terminal layer needs: ``boot``,
``execute`` and ``is_running``. Kernels are independent of each other,
so tests create a fresh one each time.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from typing import Optional

from simpleos.logger import get_logger
from simpleos.exceptions import ShutdownError
from simpleos.core.config_loader import Config, get_config
from simpleos.core.event_loop import EventLoop
from simpleos.core.session import SessionState
from simpleos.core.system_log import SystemLog
from simpleos.filesystem.path_resolver import PathResolver
from simpleos.filesystem.tree import FileSystemTree
from simpleos.process.process_table import ProcessTable
from simpleos.shell.dispatcher import CommandDispatcher


class KernelState(Enum):
    """Kernel operational state."""
    INITIALIZED = auto()
    RUNNING = auto()
    SHUTDOWN = auto()


@dataclass
class SystemInfo:
    """Snapshot of kernel information."""
    name: str
    version: str
    start_time: datetime
    current_user: str
    process_count: int


class Kernel:
    """
    The central kernel of SimpleOS.

    Example:
        >>> kernel = Kernel()
        >>> print(kernel.boot())
        >>> kernel.execute("mkdir notes")
        ''
        >>> kernel.execute("ls")
        'readme.txt\\n[DIR] notes/'
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        event_loop: Optional[EventLoop] = None
    ):
        self._config = config or get_config()
        self._logger = get_logger('kernel')

        session_config = self._config.session
        self._session = SessionState(
            current_user=session_config.user,
            home_directory=PathResolver.canonical(session_config.home)
        )

        self._system_log = SystemLog()
        self._event_loop = event_loop or EventLoop()

        self._filesystem = FileSystemTree(config=self._config)
        self._filesystem.initialize()

        self._process_table = ProcessTable(
            event_loop=self._event_loop,
            config=self._config
        )
        self._process_table.initialize()

        self._dispatcher = CommandDispatcher(self)
        self._state = KernelState.INITIALIZED

        self._system_log.info("System initialized")

    @property
    def config(self) -> Config:
        return self._config

    @property
    def state(self) -> KernelState:
        """Get the current kernel state."""
        return self._state

    @property
    def session(self) -> SessionState:
        return self._session

    @property
    def filesystem(self) -> FileSystemTree:
        return self._filesystem

    @property
    def process_table(self) -> ProcessTable:
        return self._process_table

    @property
    def system_log(self) -> SystemLog:
        return self._system_log

    @property
    def event_loop(self) -> EventLoop:
        return self._event_loop

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    @property
    def uptime(self) -> float:
        """Get the system uptime in seconds."""
        return self._session.uptime

    def boot(self) -> str:
        """
        Start the kernel.

        Starts the subsystems and the event loop. Meant to be called once,
        before the first ``execute``.

        Returns:
            The boot banner

        Raises:
            ShutdownError: If the kernel has already been shut down
        """
        if self._state == KernelState.SHUTDOWN:
            raise ShutdownError("Kernel has already been shut down", phase="boot")

        self._system_log.info(f"{self._config.kernel.name} is booting...")

        self._filesystem.start()
        self._process_table.start()
        self._event_loop.start()
        self._state = KernelState.RUNNING

        self._logger.info(
            "Kernel running",
            context={'version': self._config.kernel.version}
        )
        return self.banner()

    def banner(self) -> str:
        kernel_config = self._config.kernel
        return (
            f"{kernel_config.name} v{kernel_config.version} - {kernel_config.tagline}\n"
            "Type 'help' for available commands."
        )

    def execute(self, line: str) -> str:
        """Execute one command line and return its output."""
        return self._dispatcher.execute(line)

    def is_running(self) -> bool:
        """False once ``shutdown`` has been executed."""
        return self._session.running

    def get_system_info(self) -> SystemInfo:
        return SystemInfo(
            name=self._config.kernel.name,
            version=self._config.kernel.version,
            start_time=datetime.fromtimestamp(self._session.start_time),
            current_user=self._session.current_user,
            process_count=self._process_table.process_count
        )

    def shutdown(self) -> None:
        """
        Stop the event loop and the subsystems.

        Pending process removals are dropped. Safe to call more than once.
        """
        if self._state == KernelState.SHUTDOWN:
            return

        self._logger.info("Kernel shutting down")
        self._session.running = False

        self._event_loop.stop()
        self._process_table.stop()
        self._filesystem.stop()

        self._state = KernelState.SHUTDOWN
        self._logger.info("Kernel shutdown complete")

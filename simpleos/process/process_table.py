"""
Process Table Module

The process registry:
- Seeds the init and shell processes
- Allocates PIDs from a counter that never goes backwards
- Marks killed processes terminated and reaps them after a delay

Author: YSNRFD
Version: 1.0.0
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Any, List

from .states import ProcessState, PROTECTED_PIDS
from simpleos.core.registry import Subsystem, SubsystemState
from simpleos.core.config_loader import Config, get_config
from simpleos.core.event_loop import EventLoop
from simpleos.exceptions import (
    ProcessNotFoundError,
    ProtectedProcessError,
)


@dataclass
class Process:
    """A process record."""
    pid: int
    name: str
    user: str
    status: ProcessState = ProcessState.RUNNING
    started: datetime = field(default_factory=datetime.now)

    @property
    def is_protected(self) -> bool:
        return self.pid in PROTECTED_PIDS

    def to_dict(self) -> dict[str, Any]:
        """Convert the record to a dictionary for display."""
        return {
            'pid': self.pid,
            'name': self.name,
            'user': self.user,
            'status': self.status.value,
            'started': self.started.strftime('%Y-%m-%d %H:%M:%S'),
        }


class ProcessTable(Subsystem):
    """
    Process Registry Subsystem.

    Deferred removals run on the event loop thread, so every access to
    the table goes through a lock.

    Example:
        >>> table = ProcessTable(event_loop=EventLoop())
        >>> table.initialize()
        >>> table.terminate(2)
    """

    def __init__(
        self,
        event_loop: Optional[EventLoop] = None,
        config: Optional[Config] = None
    ):
        super().__init__('process_table')
        self._config = config or get_config()
        self._event_loop = event_loop or EventLoop()
        self._processes: dict[int, Process] = {}
        self._next_pid = 1
        self._lock = threading.RLock()

    @property
    def next_pid(self) -> int:
        return self._next_pid

    @property
    def process_count(self) -> int:
        with self._lock:
            return len(self._processes)

    def initialize(self) -> None:
        """Create init (PID 1) and the shell (PID 2)."""
        self._logger.info("Initializing process table")

        proc_config = self._config.process

        with self._lock:
            self._processes.clear()
            self._next_pid = 1
            self.create_process(proc_config.init_process, proc_config.init_user)
            self.create_process(proc_config.shell_process, self._config.session.user)

        self.set_state(SubsystemState.INITIALIZED)

    def create_process(self, name: str, user: str) -> int:
        """
        Register a new running process.

        Returns:
            PID of the new process
        """
        with self._lock:
            pid = self._next_pid
            self._next_pid += 1
            self._processes[pid] = Process(pid=pid, name=name, user=user)

        self._logger.debug(
            f"Created process '{name}'",
            pid=pid,
            context={'user': user}
        )
        return pid

    def get_process(self, pid: int) -> Process:
        """
        Get a process by PID.

        Raises:
            ProcessNotFoundError: If process doesn't exist
        """
        with self._lock:
            process = self._processes.get(pid)
        if process is None:
            raise ProcessNotFoundError(pid)
        return process

    def list_processes(self) -> List[Process]:
        """Snapshot of all registered processes in PID order of creation."""
        with self._lock:
            return list(self._processes.values())

    def terminate(self, pid: int) -> Process:
        """
        Kill a process.

        The process is marked terminated immediately; its entry is
        dropped once ``process.reap_delay`` seconds have passed.

        Raises:
            ProtectedProcessError: For init
            ProcessNotFoundError: If process doesn't exist
        """
        if pid in PROTECTED_PIDS:
            raise ProtectedProcessError(pid, name=self._config.process.init_process)

        with self._lock:
            process = self._processes.get(pid)
            if process is None:
                raise ProcessNotFoundError(pid)
            process.status = ProcessState.TERMINATED

        self._logger.info(f"Terminated process '{process.name}'", pid=pid)

        self._event_loop.schedule_timer(
            lambda: self.discard(pid),
            delay=self._config.process.reap_delay,
            description=f"reap pid {pid}"
        )
        return process

    def discard(self, pid: int) -> bool:
        """
        Remove a process entry if it is still present.

        Returns:
            True if an entry was removed
        """
        with self._lock:
            process = self._processes.pop(pid, None)

        if process is None:
            return False

        self._logger.debug(f"Reaped process '{process.name}'", pid=pid)
        return True

    def get_stats(self) -> dict[str, Any]:
        """Get process table statistics."""
        with self._lock:
            processes = list(self._processes.values())
        return {
            'total_processes': len(processes),
            'running_processes': len(
                [p for p in processes if p.status == ProcessState.RUNNING]
            ),
            'next_pid': self._next_pid,
        }

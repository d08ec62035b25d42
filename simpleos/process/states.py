"""
Process States Module

Defines the lifecycle states for processes in SimpleOS.

Author: YSNRFD
Version: 1.0.0
"""

from enum import Enum


class ProcessState(Enum):
    """
    Process lifecycle states.

    State transitions:
        RUNNING -> TERMINATED: ``kill`` marks the process
        TERMINATED -> (removed): the reaper drops it after a delay
    """

    RUNNING = "running"
    """Process is alive."""

    TERMINATED = "terminated"
    """Process was killed and is waiting to be removed."""

    def __str__(self) -> str:
        return self.value


# PIDs that can never be terminated
PROTECTED_PIDS = frozenset({1})

"""
SimpleOS Process Module

The process registry:
- Process records and states
- PID allocation
- Deferred removal of killed processes
"""

from .states import ProcessState, PROTECTED_PIDS
from .process_table import Process, ProcessTable

__all__ = [
    'ProcessState',
    'PROTECTED_PIDS',
    'Process',
    'ProcessTable',
]

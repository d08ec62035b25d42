"""
SimpleOS Core Module

Core kernel support components:
- Configuration Loader
- Subsystem lifecycle
- Event Loop
- Session state and System Log

The kernel and bootloader live in ``simpleos.core.kernel`` and
``simpleos.core.bootloader``; they import the subsystems, which in turn
import this package.
"""

from .config_loader import ConfigLoader, Config, get_config
from .registry import Subsystem, SubsystemState
from .event_loop import EventLoop, Event
from .session import SessionState, format_uptime
from .system_log import SystemLog, LogEntry

__all__ = [
    # Config
    'ConfigLoader',
    'Config',
    'get_config',
    # Lifecycle
    'Subsystem',
    'SubsystemState',
    # Event Loop
    'EventLoop',
    'Event',
    # Session
    'SessionState',
    'format_uptime',
    'SystemLog',
    'LogEntry',
]

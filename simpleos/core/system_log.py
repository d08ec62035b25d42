"""
System Log

Append-only record of what happened during a session. The log is purely
observational: no command reads it back. Each entry is also forwarded to
the ``syslog`` logger so it shows up wherever logging is configured to go.

Author: YSNRFD
Version: 1.0.0
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from simpleos.logger import LogLevel, get_logger


@dataclass(frozen=True)
class LogEntry:
    """A single System Log entry."""
    level: str
    message: str
    time: datetime = field(default_factory=datetime.now)


class SystemLog:
    """
    Ordered, append-only sequence of ``LogEntry`` records.

    Example:
        >>> log = SystemLog()
        >>> log.log("INFO", "Executing: ls")
        >>> log.entries()[-1].message
        'Executing: ls'
    """

    def __init__(self):
        self._entries: List[LogEntry] = []
        self._lock = threading.Lock()
        self._logger = get_logger('syslog')

    def log(self, level: str, message: str) -> LogEntry:
        """Append an entry and mirror it to the logger."""
        level = level.upper()
        entry = LogEntry(level=level, message=message)

        with self._lock:
            self._entries.append(entry)

        numeric = LogLevel[level] if level in LogLevel.__members__ else LogLevel.INFO
        self._logger.log(numeric, message)
        return entry

    def info(self, message: str) -> LogEntry:
        return self.log("INFO", message)

    def error(self, message: str) -> LogEntry:
        return self.log("ERROR", message)

    def entries(self) -> List[LogEntry]:
        """Return a snapshot of all entries in order."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

"""
SimpleOS Logger Module

Thin layer over the standard ``logging`` package. Every subsystem gets a
named ``Logger`` (``simpleos.<subsystem>``) whose records carry the
subsystem name, an optional PID and a small context dict. Handlers are
attached once, to the ``simpleos`` parent logger, by ``Logger.initialize``:
- stderr console output, colored on a terminal
- an optional log file
- an in-memory ring buffer that diagnostics and tests can query

Author: YSNRFD
Version: 1.0.0
"""

import logging
import sys
import threading
from collections import deque
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Optional, Any, List


class LogLevel(IntEnum):
    """Severity levels; NOTICE sits between INFO and WARNING."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    NOTICE = 25
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


logging.addLevelName(LogLevel.NOTICE, 'NOTICE')

ROOT_LOGGER_NAME = 'simpleos'


class LogFormatter(logging.Formatter):
    """
    Renders one record per line::

        [2026-10-18 16:32:00.123] INFO     [filesystem] (pid=3) Inserted node {path=/tmp}
    """

    LEVEL_COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'NOTICE': '\033[34m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and getattr(sys.stderr, 'isatty', lambda: False)()

    def _level(self, name: str) -> str:
        padded = f"{name:<8}"
        color = self.LEVEL_COLORS.get(name)
        if self.use_colors and color:
            return f"{color}{padded}{self.RESET}"
        return padded

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        parts = [f"[{stamp}]", self._level(record.levelname)]

        subsystem = getattr(record, 'subsystem', None)
        if subsystem:
            parts.append(f"[{subsystem}]")

        pid = getattr(record, 'pid', None)
        if pid is not None:
            parts.append(f"(pid={pid})")

        parts.append(record.getMessage())

        context = getattr(record, 'context', None)
        if context:
            pairs = ' '.join(f"{key}={value}" for key, value in context.items())
            parts.append('{' + pairs + '}')

        line = ' '.join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class MemoryLogHandler(logging.Handler):
    """Keeps the last ``max_entries`` records as plain dicts."""

    def __init__(self, max_entries: int = 10000):
        super().__init__()
        self._records: deque = deque(maxlen=max_entries)
        self._records_lock = threading.Lock()

    @property
    def max_entries(self) -> int:
        return self._records.maxlen

    def emit(self, record: logging.LogRecord) -> None:
        entry = {
            'timestamp': record.created,
            'level': record.levelname,
            'subsystem': getattr(record, 'subsystem', None),
            'pid': getattr(record, 'pid', None),
            'message': record.getMessage(),
            'context': dict(getattr(record, 'context', None) or {}),
        }
        with self._records_lock:
            self._records.append(entry)

    def get_logs(
        self,
        level: Optional[str] = None,
        subsystem: Optional[str] = None,
        limit: int = 100
    ) -> List[dict[str, Any]]:
        """Most recent records, oldest first, optionally filtered."""
        with self._records_lock:
            records = list(self._records)

        if level:
            records = [r for r in records if r['level'] == level]
        if subsystem:
            records = [r for r in records if r['subsystem'] == subsystem]

        return records[-limit:]

    def clear(self) -> None:
        with self._records_lock:
            self._records.clear()


class Logger:
    """
    Per-subsystem logger. ``Logger('kernel')`` always returns the same
    object.

    Example:
        >>> log = get_logger('process_table')
        >>> log.info("Terminated process 'shell'", pid=2)
        >>> log.debug("Inserted node", context={'path': '/tmp'})
    """

    _loggers: dict[str, 'Logger'] = {}
    _lock = threading.Lock()
    _initialized = False
    _memory_handler: Optional[MemoryLogHandler] = None
    _handlers: List[logging.Handler] = []

    def __new__(cls, subsystem: str = 'kernel') -> 'Logger':
        with cls._lock:
            logger = cls._loggers.get(subsystem)
            if logger is None:
                logger = super().__new__(cls)
                logger._subsystem = subsystem
                logger._logger = logging.getLogger(f'{ROOT_LOGGER_NAME}.{subsystem}')
                cls._loggers[subsystem] = logger
            return logger

    @property
    def subsystem(self) -> str:
        return self._subsystem

    @classmethod
    def initialize(
        cls,
        level: int = LogLevel.INFO,
        log_file: Optional[str] = None,
        use_colors: bool = True,
        console_output: bool = True,
        max_entries: int = 10000
    ) -> None:
        """
        Attach handlers to the ``simpleos`` logger.

        Only the first call has an effect; call ``reset`` to reconfigure.

        Args:
            level: Threshold for every handler
            log_file: Also write records to this file
            use_colors: Color level names on a terminal
            console_output: Write records to stderr
            max_entries: Capacity of the in-memory buffer
        """
        with cls._lock:
            if cls._initialized:
                return

            root = logging.getLogger(ROOT_LOGGER_NAME)
            root.setLevel(level)

            handlers: List[logging.Handler] = []

            cls._memory_handler = MemoryLogHandler(max_entries=max_entries)
            handlers.append(cls._memory_handler)

            if console_output:
                console = logging.StreamHandler(sys.stderr)
                console.setFormatter(LogFormatter(use_colors=use_colors))
                handlers.append(console)
            else:
                handlers.append(logging.NullHandler())

            if log_file:
                Path(log_file).parent.mkdir(parents=True, exist_ok=True)
                to_file = logging.FileHandler(log_file, encoding='utf-8')
                to_file.setFormatter(LogFormatter(use_colors=False))
                handlers.append(to_file)

            for handler in handlers:
                handler.setLevel(level)
                root.addHandler(handler)

            cls._handlers = handlers
            cls._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Remove and close the handlers added by ``initialize``."""
        with cls._lock:
            root = logging.getLogger(ROOT_LOGGER_NAME)
            for handler in cls._handlers:
                root.removeHandler(handler)
                handler.close()
            cls._handlers = []
            cls._memory_handler = None
            cls._initialized = False

    @classmethod
    def get_buffered_logs(
        cls,
        level: Optional[str] = None,
        subsystem: Optional[str] = None,
        limit: int = 100
    ) -> List[dict[str, Any]]:
        """Query the in-memory buffer; empty before ``initialize``."""
        if cls._memory_handler is None:
            return []
        return cls._memory_handler.get_logs(level=level, subsystem=subsystem, limit=limit)

    def log(
        self,
        level: int,
        message: str,
        pid: Optional[int] = None,
        context: Optional[dict[str, Any]] = None,
        exc_info: Any = None
    ) -> None:
        """Emit a record at ``level`` tagged with this subsystem."""
        self._logger.log(
            level,
            message,
            exc_info=exc_info,
            extra={'subsystem': self._subsystem, 'pid': pid, 'context': context or {}}
        )

    def debug(self, message: str, pid: Optional[int] = None,
              context: Optional[dict[str, Any]] = None) -> None:
        self.log(LogLevel.DEBUG, message, pid, context)

    def info(self, message: str, pid: Optional[int] = None,
             context: Optional[dict[str, Any]] = None) -> None:
        self.log(LogLevel.INFO, message, pid, context)

    def notice(self, message: str, pid: Optional[int] = None,
               context: Optional[dict[str, Any]] = None) -> None:
        """Normal but significant condition, such as a moved working directory."""
        self.log(LogLevel.NOTICE, message, pid, context)

    def warning(self, message: str, pid: Optional[int] = None,
                context: Optional[dict[str, Any]] = None) -> None:
        self.log(LogLevel.WARNING, message, pid, context)

    def error(self, message: str, pid: Optional[int] = None,
              context: Optional[dict[str, Any]] = None) -> None:
        self.log(LogLevel.ERROR, message, pid, context)

    def critical(self, message: str, pid: Optional[int] = None,
                 context: Optional[dict[str, Any]] = None) -> None:
        self.log(LogLevel.CRITICAL, message, pid, context)

    def exception(
        self,
        message: str,
        exc: Optional[BaseException] = None,
        pid: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        """ERROR record with the traceback of ``exc`` (or the one being handled)."""
        self.log(LogLevel.ERROR, message, pid, context, exc_info=exc or True)


def get_logger(subsystem: str) -> Logger:
    """Shortcut for ``Logger(subsystem)``."""
    return Logger(subsystem)


def parse_level(name: str, default: int = LogLevel.INFO) -> int:
    """Map a level name from configuration to a ``LogLevel``."""
    try:
        return LogLevel[name.upper()]
    except KeyError:
        return default

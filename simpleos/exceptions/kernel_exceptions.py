"""
Kernel Exceptions

Exceptions related to kernel operations, boot process and configuration.
Unlike command failures, these surface to the code that boots or tears
down a session.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class KernelException(Exception):
    """
    Root of the boot, configuration and shutdown errors (codes 1000-1999).

    ``recoverable`` tells the caller whether the session can carry on;
    ``context`` holds the key/value details shown after the message.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        recoverable: bool = False,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 1000
        self.recoverable = recoverable
        self.context = context or {}

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.context:
            details = ", ".join(f"{key}={value}" for key, value in self.context.items())
            base = f"{base} ({details})"
        return base

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, error_code={self.error_code})"


class BootFailureError(KernelException):
    """
    Error during the boot sequence.

    Common causes:
    - Unreadable or malformed configuration file
    - Unsupported interpreter version

    Example:
        >>> raise BootFailureError("Invalid JSON", subsystem="config")
    """

    def __init__(
        self,
        message: str,
        subsystem: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if subsystem:
            ctx["subsystem"] = subsystem
        super().__init__(
            message=message,
            error_code=1001,
            recoverable=True,
            context=ctx
        )
        self.subsystem = subsystem


class ConfigValidationError(KernelException):
    """Raised when a configuration key or value is rejected."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        super().__init__(
            message=message,
            error_code=1002,
            recoverable=True,
            context=ctx
        )
        self.key = key


class ShutdownError(KernelException):
    """
    Error during system shutdown.

    Example:
        >>> raise ShutdownError("Event loop did not stop", phase="event_loop")
    """

    def __init__(
        self,
        message: str,
        phase: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if phase:
            ctx["shutdown_phase"] = phase
        super().__init__(
            message=message,
            error_code=1003,
            recoverable=True,
            context=ctx
        )
        self.phase = phase

"""
Process Exceptions

Exceptions related to the process registry: lookups, protected
processes and malformed PIDs.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class ProcessException(Exception):
    """
    Root of the process registry errors (codes 2000-2999).

    ``pid`` is the process the operation targeted, when there is one.
    """

    def __init__(
        self,
        message: str,
        pid: Optional[int] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.pid = pid
        self.error_code = error_code or 2000
        self.context = context or {}
        if pid is not None:
            self.context["pid"] = pid

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.pid is not None:
            base = f"{base} (pid={self.pid})"
        return base


class ProcessNotFoundError(ProcessException):
    """
    No process with this PID is registered.
    """

    def __init__(
        self,
        pid: int,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"No process with PID {pid}",
            pid=pid,
            error_code=2003,
            context=context
        )


class ProtectedProcessError(ProcessException):
    """
    The process may not be terminated.

    PID 1 (init) is the only protected process.

    Example:
        >>> raise ProtectedProcessError(1, name="init")
    """

    def __init__(
        self,
        pid: int,
        name: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if name:
            ctx["name"] = name
        super().__init__(
            message=f"Process {pid} is protected",
            pid=pid,
            error_code=2004,
            context=ctx
        )
        self.name = name


class InvalidPidError(ProcessException):
    """
    A PID operand could not be parsed as an integer.

    Example:
        >>> raise InvalidPidError("abc")
    """

    def __init__(
        self,
        value: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["value"] = value
        super().__init__(
            message=f"Invalid PID: {value}",
            error_code=2005,
            context=ctx
        )
        self.value = value

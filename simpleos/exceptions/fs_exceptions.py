"""
Filesystem Exceptions

Exceptions raised by the filesystem tree while resolving paths and
creating, reading or removing nodes. The command layer turns them into
``<cmd>: <detail>`` diagnostics; they never reach the caller of
``execute``.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class FileSystemException(Exception):
    """
    Root of the filesystem tree errors (codes 4000-4999).

    ``path`` is the absolute path the operation was working on and
    ``reason`` the short Unix-style diagnostic for command output.
    """

    reason = "Input/output error"

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.error_code = error_code or 4000
        self.context = context or {}
        if path:
            self.context["path"] = path

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.path:
            base = f"{base} (path={self.path})"
        return base


class FileNotFoundError(FileSystemException):
    """
    The specified path does not exist.

    Raised when a path segment is missing, or when an intermediate
    segment is a file rather than a directory.

    Example:
        >>> raise FileNotFoundError("/home/user/missing.txt")
    """

    reason = "No such file or directory"

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"{path} does not exist",
            path=path,
            error_code=4001,
            context=context
        )


class FileExistsError(FileSystemException):
    """
    The specified name is already taken in its directory.

    Example:
        >>> raise FileExistsError("/home/user/notes")
    """

    reason = "File exists"

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"{path} is already taken",
            path=path,
            error_code=4002,
            context=context
        )


class PathResolutionError(FileSystemException):
    """
    A path cannot be turned into a usable name.

    Raised when a name handed to the tree cannot be a directory entry
    (empty, or containing a slash).

    Example:
        >>> raise PathResolutionError("a/b", reason="invalid entry name")
    """

    def __init__(
        self,
        path: str,
        component: Optional[str] = None,
        reason: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if component:
            ctx["component"] = component
        if reason:
            ctx["reason"] = reason
        super().__init__(
            message=f"Bad entry name: {path!r}",
            path=path,
            error_code=4006,
            context=ctx
        )
        self.component = component
        self.detail = reason


class IsADirectoryError(FileSystemException):
    """
    A file operation was attempted on a directory.

    Example:
        >>> raise IsADirectoryError("/home/user")
    """

    reason = "Is a directory"

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Is a directory: {path}",
            path=path,
            error_code=4008,
            context=context
        )


class NotADirectoryError(FileSystemException):
    """
    A directory operation was attempted on a file.

    Example:
        >>> raise NotADirectoryError("/etc/passwd")
    """

    reason = "Not a directory"

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"{path} is a file, not a directory",
            path=path,
            error_code=4009,
            context=context
        )

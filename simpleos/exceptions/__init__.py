"""
SimpleOS Exception Hierarchy

Every custom exception belongs to one of three families, one per
subsystem. Filesystem and process errors are recoverable and are turned
into command diagnostics by the shell builtins; kernel errors surface to
whoever boots or shuts down the system.

Architecture:
    KernelException
    ├── BootFailureError
    ├── ConfigValidationError
    └── ShutdownError
    ProcessException
    ├── ProcessNotFoundError
    ├── ProtectedProcessError
    └── InvalidPidError
    FileSystemException
    ├── FileNotFoundError
    ├── FileExistsError
    ├── PathResolutionError
    ├── IsADirectoryError
    └── NotADirectoryError
"""

from .kernel_exceptions import (
    KernelException,
    BootFailureError,
    ConfigValidationError,
    ShutdownError,
)

from .process_exceptions import (
    ProcessException,
    ProcessNotFoundError,
    ProtectedProcessError,
    InvalidPidError,
)

from .fs_exceptions import (
    FileSystemException,
    FileNotFoundError,
    FileExistsError,
    PathResolutionError,
    IsADirectoryError,
    NotADirectoryError,
)

__all__ = [
    # Kernel exceptions
    "KernelException",
    "BootFailureError",
    "ConfigValidationError",
    "ShutdownError",
    # Process exceptions
    "ProcessException",
    "ProcessNotFoundError",
    "ProtectedProcessError",
    "InvalidPidError",
    # Filesystem exceptions
    "FileSystemException",
    "FileNotFoundError",
    "FileExistsError",
    "PathResolutionError",
    "IsADirectoryError",
    "NotADirectoryError",
]

"""
SimpleOS - A single-user operating system shell simulation

An in-memory hierarchical filesystem driven by Unix-like commands, plus a
minimal process registry. All state lives in memory for the lifetime of a
``Kernel``.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

from .core.kernel import Kernel, KernelState, SystemInfo
from .core.bootloader import Bootloader, boot_system
from .shell.builtins import CLEAR_SENTINEL
from .shell.shell import Shell

__all__ = [
    'Kernel',
    'KernelState',
    'SystemInfo',
    'Bootloader',
    'boot_system',
    'CLEAR_SENTINEL',
    'Shell',
]

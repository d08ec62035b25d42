"""
SimpleOS Subsystem Lifecycle

Base class shared by the stateful parts of the kernel (the filesystem
tree and the process table). It gives each of them a name, a logger and
a lifecycle state that the kernel drives during boot and shutdown.

Author: YSNRFD
Version: 1.0.0
"""

from abc import ABC, abstractmethod
from enum import Enum, auto

from simpleos.logger import Logger, get_logger


class SubsystemState(Enum):
    CREATED = auto()
    INITIALIZED = auto()
    RUNNING = auto()
    STOPPED = auto()


class Subsystem(ABC):
    """
    A named, stateful kernel component.

    The kernel calls ``initialize`` while it is being constructed,
    ``start`` from ``Kernel.boot`` and ``stop`` from ``Kernel.shutdown``.
    Subclasses build their initial state in ``initialize`` and must end
    it with ``set_state(SubsystemState.INITIALIZED)``.
    """

    def __init__(self, name: str):
        self._name = name
        self._logger = get_logger(name)
        self._state = SubsystemState.CREATED

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> SubsystemState:
        return self._state

    @property
    def logger(self) -> Logger:
        return self._logger

    def set_state(self, state: SubsystemState) -> None:
        previous, self._state = self._state, state
        self._logger.debug(f"{previous.name} -> {state.name}")

    @abstractmethod
    def initialize(self) -> None:
        """Build the initial state; runs before any command."""

    def start(self) -> None:
        self.set_state(SubsystemState.RUNNING)

    def stop(self) -> None:
        self.set_state(SubsystemState.STOPPED)

    def health_check(self) -> bool:
        """True while the subsystem can serve requests."""
        return self._state in (SubsystemState.INITIALIZED, SubsystemState.RUNNING)

"""
SimpleOS Bootloader

Brings a session up in order:
- interpreter check
- configuration file (optional) and its validation
- logging handlers
- kernel construction and boot banner

Any failure stops the sequence; the returned ``BootResult`` names the
stage that failed.

Author: YSNRFD
Version: 1.0.0
"""

from __future__ import annotations

import sys
import time
from pathlib import Path
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from simpleos.core.kernel import Kernel

from simpleos.logger import Logger, get_logger, parse_level
from simpleos.exceptions import BootFailureError, ConfigValidationError
from simpleos.core.config_loader import Config, ConfigLoader, get_config


class BootStage(Enum):
    """Where the boot sequence is (or where it stopped)."""
    PRE_INIT = auto()
    CONFIG_LOAD = auto()
    LOGGING_INIT = auto()
    KERNEL_INIT = auto()
    COMPLETE = auto()
    FAILED = auto()


@dataclass
class BootResult:
    """Outcome of ``Bootloader.boot``."""
    success: bool
    stage: BootStage
    message: str
    elapsed_time: float
    banner: str = ""
    error: Optional[Exception] = None


def validate_config(config: Config) -> None:
    """
    Reject settings the kernel cannot run with.

    Raises:
        ConfigValidationError: On the first bad value
    """
    if not config.session.home.startswith('/'):
        raise ConfigValidationError(
            f"Home directory must be absolute: {config.session.home}",
            key='session.home'
        )
    if not config.session.user:
        raise ConfigValidationError("User name must not be empty", key='session.user')
    if config.process.reap_delay < 0:
        raise ConfigValidationError(
            f"Reap delay must not be negative: {config.process.reap_delay}",
            key='process.reap_delay'
        )


class Bootloader:
    """
    Runs the boot stages and keeps the resulting kernel.

    Example:
        >>> loader = Bootloader('simpleos.json')
        >>> outcome = loader.boot()
        >>> if outcome.success:
        ...     print(outcome.banner)
    """

    def __init__(self, config_path: Optional[str] = None):
        self._config_path = config_path
        self._stage = BootStage.PRE_INIT
        self._logger: Optional[Logger] = None
        self._kernel: Optional[Kernel] = None

    @property
    def stage(self) -> BootStage:
        return self._stage

    def boot(self) -> BootResult:
        """
        Run every stage in order.

        Never raises; failures are reported through the result.
        """
        started = time.time()

        try:
            self._enter(BootStage.PRE_INIT)
            self._check_interpreter()

            self._enter(BootStage.CONFIG_LOAD)
            self._load_config()

            self._enter(BootStage.LOGGING_INIT)
            self._init_logging()
            self._logger = get_logger('bootloader')
            self._logger.debug("Logging ready", context={'config': self._config_path or 'defaults'})

            self._enter(BootStage.KERNEL_INIT)
            banner = self._init_kernel()

        except Exception as e:
            failed = self._stage
            self._stage = BootStage.FAILED
            if self._logger:
                self._logger.critical(f"Boot stopped in {failed.name}: {e}")
            return BootResult(
                success=False,
                stage=failed,
                message=f"Boot failed: {e}",
                elapsed_time=time.time() - started,
                error=e
            )

        self._stage = BootStage.COMPLETE
        elapsed = time.time() - started
        self._logger.info("Boot finished", context={'elapsed_ms': f"{elapsed * 1000:.2f}"})

        return BootResult(
            success=True,
            stage=self._stage,
            message="Boot finished",
            elapsed_time=elapsed,
            banner=banner
        )

    def _enter(self, stage: BootStage) -> None:
        self._stage = stage
        if self._logger:
            self._logger.debug(f"Entering {stage.name}")

    def _check_interpreter(self) -> None:
        if sys.version_info < (3, 10):
            raise BootFailureError(
                "SimpleOS needs Python 3.10 or newer",
                subsystem="bootloader"
            )

    def _load_config(self) -> None:
        """Read the configuration file, if one was given and exists."""
        if self._config_path and Path(self._config_path).exists():
            ConfigLoader().load(self._config_path)

        validate_config(get_config())

    def _init_logging(self) -> None:
        settings = get_config().logging

        Logger.initialize(
            level=parse_level(settings.level),
            log_file=settings.log_file,
            use_colors=settings.use_colors,
            console_output=settings.console_output,
            max_entries=settings.max_entries
        )

    def _init_kernel(self) -> str:
        from simpleos.core.kernel import Kernel

        self._kernel = Kernel(config=get_config())
        return self._kernel.boot()

    def get_kernel(self) -> Optional[Kernel]:
        """The kernel built by ``boot``, or None if boot did not get that far."""
        return self._kernel

    def shutdown(self) -> None:
        """Shut the kernel down, if there is one."""
        if self._kernel is None:
            return

        self._kernel.shutdown()
        if self._logger:
            self._logger.info("Session closed")


def boot_system(config_path: Optional[str] = None) -> Tuple[BootResult, Optional[Kernel]]:
    """Boot with a fresh ``Bootloader`` and hand back the result and kernel."""
    loader = Bootloader(config_path)
    return loader.boot(), loader.get_kernel()

"""
SimpleOS Configuration Loader

Settings live in one ``Config`` dataclass made of per-area sections.
Every field has a default, so a JSON file only needs the keys it
changes::

    {"session": {"user": "alice", "home": "/home/alice"},
     "process": {"reap_delay": 0.5}}

Author: YSNRFD
Version: 1.0.0
"""

import json
import threading
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Optional

from simpleos.exceptions import BootFailureError, ConfigValidationError


@dataclass
class KernelConfig:
    """Name and version shown in the boot banner."""
    name: str = "SimpleOS"
    version: str = "0.1"
    tagline: str = "Primitive OS Simulation"


@dataclass
class SessionConfig:
    """Settings for the single interactive session."""
    user: str = "user"
    home: str = "/home/user"


@dataclass
class FilesystemConfig:
    """Filesystem seeding settings."""
    seed_standard_tree: bool = True


@dataclass
class ProcessConfig:
    """Process registry settings."""
    init_process: str = "init"
    init_user: str = "root"
    shell_process: str = "shell"
    reap_delay: float = 1.0  # seconds between kill and removal


@dataclass
class LoggingConfig:
    """Handlers attached by the bootloader."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    console_output: bool = True
    use_colors: bool = True
    max_entries: int = 10000


@dataclass
class ShellConfig:
    """Terminal shell settings."""
    prompt: str = "$ "


@dataclass
class Config:
    """All settings, one section per area."""
    kernel: KernelConfig = field(default_factory=KernelConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    filesystem: FilesystemConfig = field(default_factory=FilesystemConfig)
    process: ProcessConfig = field(default_factory=ProcessConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)


class ConfigLoader:
    """
    Process-wide holder of the active ``Config``.

    Example:
        >>> ConfigLoader().load('simpleos.json')
        >>> ConfigLoader().get('session.user')
        'alice'
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        with cls._lock:
            if cls._instance is None:
                loader = super().__new__(cls)
                loader._config = Config()
                loader._source = None
                cls._instance = loader
            return cls._instance

    @property
    def config(self) -> Config:
        return self._config

    @property
    def source(self) -> Optional[str]:
        """Path of the file the active settings came from, if any."""
        return self._source

    def load(self, config_path: str) -> Config:
        """
        Replace the active settings with those of a JSON file.

        Raises:
            BootFailureError: If the file is missing, unreadable, not JSON,
                or not a JSON object
        """
        path = Path(config_path)
        if not path.exists():
            raise BootFailureError(f"No configuration file at {config_path}", subsystem="config")

        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except json.JSONDecodeError as e:
            raise BootFailureError(f"{config_path} is not valid JSON: {e}", subsystem="config")
        except OSError as e:
            raise BootFailureError(f"Cannot read {config_path}: {e}", subsystem="config")

        if not isinstance(data, dict):
            raise BootFailureError(
                f"{config_path} must contain a JSON object",
                subsystem="config"
            )

        self._config = self.parse(data)
        self._source = str(path)
        return self._config

    @staticmethod
    def parse(data: dict[str, Any]) -> Config:
        """
        Build a ``Config`` from decoded JSON.

        Sections and keys that are absent keep their defaults; unknown
        keys inside a known section are ignored.
        """
        config = Config()

        for section in fields(Config):
            section_data = data.get(section.name)
            if not isinstance(section_data, dict):
                continue

            current = getattr(config, section.name)
            known = {f.name for f in fields(current)}
            overrides = {k: v for k, v in section_data.items() if k in known}
            setattr(config, section.name, replace(current, **overrides))

        return config

    def _section_for(self, key: str) -> tuple[Any, str]:
        section_name, _, name = key.partition('.')
        section = getattr(self._config, section_name, None)
        if not name or section is None or not hasattr(section, name):
            raise ConfigValidationError(f"Unknown configuration key: {key}", key=key)
        return section, name

    def get(self, key: str, default: Any = None) -> Any:
        """Value of a ``section.name`` key, or ``default`` if there is none."""
        try:
            section, name = self._section_for(key)
        except ConfigValidationError:
            return default
        return getattr(section, name)

    def set(self, key: str, value: Any) -> None:
        """
        Change one ``section.name`` value at runtime.

        Raises:
            ConfigValidationError: If the key does not exist
        """
        section, name = self._section_for(key)
        setattr(section, name, value)

    def reset(self) -> None:
        """Go back to the built-in defaults."""
        self._config = Config()
        self._source = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self._config)


def get_config() -> Config:
    """The active ``Config``."""
    return ConfigLoader().config

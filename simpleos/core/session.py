"""
Session State

The process-wide state of the single interactive session.
"""

import time
from dataclasses import dataclass, field


@dataclass
class SessionState:
    """
    Mutable state shared by every command of a session.

    ``current_directory`` always names an existing directory; commands
    that would move it somewhere invalid leave it untouched.
    """
    current_user: str = "user"
    home_directory: str = "/home/user"
    current_directory: str = ""
    start_time: float = field(default_factory=time.time)
    running: bool = True

    def __post_init__(self):
        if not self.current_directory:
            self.current_directory = self.home_directory

    @property
    def uptime(self) -> float:
        """Seconds elapsed since the session started."""
        return max(time.time() - self.start_time, 0.0)


def format_uptime(seconds: float) -> str:
    """Render elapsed seconds as ``Xh Ym Zs``; hours are unbounded."""
    total = int(seconds)
    minutes, secs = divmod(total, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m {secs}s"

from dataclasses import dataclass
from typing import Optional


DEFAULT_REFRESH_INTERVAL = 5.0
DEFAULT_WINDOW_REFRESH_INTERVAL = 2.0


@dataclass
class Settings:
    """Runtime configuration collected from CLI options and environment"""

    tmux_command: str = "tmux"
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    window_refresh_interval: float = DEFAULT_WINDOW_REFRESH_INTERVAL
    command_timeout: Optional[float] = None
    log_level: str = "WARNING"
    log_file: Optional[str] = None

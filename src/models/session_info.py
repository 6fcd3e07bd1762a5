from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


def _epoch_to_datetime(value: int) -> Optional[datetime]:
    if value <= 0:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


@dataclass(frozen=True)
class SessionInfo:
    """Snapshot of one tmux session as reported by list-sessions"""

    name: str
    window_count: int = 0
    attached: bool = False
    created: str = ""
    current_window: str = ""
    pane_count: int = 0
    last_attached: int = 0

    @property
    def created_at(self) -> Optional[datetime]:
        """Creation time, or None when tmux reported no usable timestamp"""
        try:
            return _epoch_to_datetime(int(self.created))
        except ValueError:
            return None

    @property
    def last_attached_at(self) -> Optional[datetime]:
        return _epoch_to_datetime(self.last_attached)

from dataclasses import dataclass


@dataclass(frozen=True)
class WindowInfo:
    """Snapshot of one tmux window.

    ``id`` (e.g. ``@3``) survives renames and reordering and is the only
    safe target for window commands; ``index`` may shift.
    """

    id: str
    index: int = 0
    name: str = ""
    active: bool = False
    layout: str = ""
    session_name: str = ""

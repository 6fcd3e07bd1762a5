"""Format strings and parsers for tmux list output.

Each record is requested as one line of ``#{field}`` values joined by
``DELIMITER``. The request format is built from the field tuples below, and
the parsers read fields by the same positions, so adding a field means
touching the tuple and the matching parser together.
"""

from typing import Callable, List, Sequence, TypeVar

from models.session_info import SessionInfo
from models.window_info import WindowInfo

T = TypeVar("T")

# Multi-character sentinel; names, paths and layouts may contain "," or "|"
DELIMITER = "|||"

SESSION_FIELDS = (
    "session_name",
    "session_windows",
    "session_attached",
    "session_created",
    "window_name",
    "session_panes",
    "session_last_attached",
)

WINDOW_FIELDS = (
    "window_id",
    "window_index",
    "window_name",
    "window_active",
    "window_layout",
)


def build_format(fields: Sequence[str]) -> str:
    return DELIMITER.join("#{%s}" % field for field in fields)


SESSION_FORMAT = build_format(SESSION_FIELDS)
WINDOW_FORMAT = build_format(WINDOW_FIELDS)


def parse_int(value: str) -> int:
    """Parse an integer field, falling back to 0 for empty or malformed input"""
    try:
        return int(value.strip())
    except (ValueError, AttributeError):
        return 0


def parse_bool(value: str) -> bool:
    """tmux encodes booleans as "1"/"0"; anything else is false"""
    return value == "1"


def _fields(line: str, count: int) -> List[str]:
    parts = line.split(DELIMITER)
    if len(parts) < count:
        parts.extend([""] * (count - len(parts)))
    return parts[:count]


def parse_session_line(line: str) -> SessionInfo:
    name, windows, attached, created, window_name, panes, last_attached = _fields(
        line, len(SESSION_FIELDS)
    )
    return SessionInfo(
        name=name,
        window_count=parse_int(windows),
        attached=parse_bool(attached),
        created=created,
        current_window=window_name,
        pane_count=parse_int(panes),
        last_attached=parse_int(last_attached),
    )


def parse_window_line(line: str, session_name: str = "") -> WindowInfo:
    window_id, index, name, active, layout = _fields(line, len(WINDOW_FIELDS))
    return WindowInfo(
        id=window_id,
        index=parse_int(index),
        name=name,
        active=parse_bool(active),
        layout=layout,
        session_name=session_name,
    )


def split_records(output: str) -> List[str]:
    """Split raw output into record lines, dropping blank ones"""
    return [line.rstrip("\r") for line in output.split("\n") if line.strip()]


def _parse_all(output: str, parse_line: Callable[[str], T]) -> List[T]:
    return [parse_line(line) for line in split_records(output)]


def parse_sessions(output: str) -> List[SessionInfo]:
    return _parse_all(output, parse_session_line)


def parse_windows(output: str, session_name: str = "") -> List[WindowInfo]:
    return _parse_all(output, lambda line: parse_window_line(line, session_name))

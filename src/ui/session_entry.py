"""List entry widgets for sessions and windows"""

from textual.widget import Widget
from textual.widgets import Label

from models.session_info import SessionInfo
from models.window_info import WindowInfo


class RecordEntry(Widget):
    """Selectable row in a record list"""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._is_selected = False

    @property
    def is_selected(self) -> bool:
        """Whether this entry is currently selected"""
        return self._is_selected

    @is_selected.setter
    def is_selected(self, value: bool):
        """Set selection state"""
        self._is_selected = value
        self.add_class("--selected" if value else "--unselected")
        self.remove_class("--unselected" if value else "--selected")

    @property
    def is_active(self) -> bool:
        return False

    def on_mount(self):
        """Set up initial styling based on record state"""
        if self.is_active:
            self.add_class("--active")


class SessionEntry(RecordEntry):
    """Individual session display item within sidebar"""

    def __init__(self, session_info: SessionInfo, **kwargs):
        super().__init__(**kwargs)
        self._session_info = session_info

    @property
    def session_info(self) -> SessionInfo:
        """Associated session information"""
        return self._session_info

    @property
    def is_active(self) -> bool:
        """Whether this session is currently attached in tmux"""
        return self._session_info.attached

    def compose(self):
        """Compose the session entry layout"""
        session = self._session_info
        # Active indicator (● for attached, ○ for detached)
        indicator = "●" if self.is_active else "○"
        state = "Attached" if self.is_active else "Detached"

        yield Label(
            f"{indicator} {session.name}  "
            f"{session.window_count} win • {session.pane_count} panes",
            classes="session-name",
        )

        details = [state]
        last_attached = session.last_attached_at
        if last_attached:
            details.append(f"Last attached {last_attached.astimezone():%b %d %H:%M}")
        if session.current_window:
            details.append(f"▣ {session.current_window}")
        yield Label("  ".join(details), classes="session-time")


class WindowEntry(RecordEntry):
    """Individual window display item"""

    def __init__(self, window_info: WindowInfo, **kwargs):
        super().__init__(**kwargs)
        self._window_info = window_info

    @property
    def window_info(self) -> WindowInfo:
        return self._window_info

    @property
    def is_active(self) -> bool:
        return self._window_info.active

    def compose(self):
        window = self._window_info
        indicator = "●" if self.is_active else "○"
        active = "  Active" if self.is_active else ""
        yield Label(f"{indicator} {window.index}: {window.name}{active}", classes="window-name")

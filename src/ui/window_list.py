"""Window management screen for a single session"""

from typing import Optional, Tuple

from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header, Input, Label

from models.settings import DEFAULT_WINDOW_REFRESH_INTERVAL
from models.window_info import WindowInfo
from lib.directory import WindowDirectory
from lib.tmux_interface import TMuxInterface
from ui.dialogs import DeleteConfirmScreen, NameInputScreen
from ui.session_sidebar import WindowSidebar


class WindowListScreen(Screen):
    """Lists a session's windows and refreshes them every couple of seconds"""

    AUTO_FOCUS = "WindowSidebar"

    BINDINGS = [
        Binding("escape", "back", "Back"),
        Binding("enter", "switch_window", "Switch"),
        Binding("n", "new_window", "New Window"),
        Binding("e", "rename_window", "Rename Window"),
        Binding("d", "delete_window", "Delete Window"),
        Binding("ctrl+r", "refresh", "Refresh"),
        Binding("up", "cursor_up", "Previous", show=False),
        Binding("down", "cursor_down", "Next", show=False),
    ]

    def __init__(
        self,
        session_name: str,
        interface: TMuxInterface,
        interval: float = DEFAULT_WINDOW_REFRESH_INTERVAL,
    ):
        super().__init__()
        self.session_name = session_name
        self.tmux_interface = interface
        self.window_list: Optional[WindowSidebar] = None
        self._error_shown = False
        self.windows = WindowDirectory(
            interface,
            session_name,
            interval=interval,
            on_update=self._on_windows_updated,
            on_error=self._on_windows_error,
        )

    def compose(self):
        yield Header()
        yield Label(f"Windows: {self.session_name}", classes="session-header")
        yield Input(placeholder="Search windows...", id="window-filter")
        yield WindowSidebar(id="window-list")
        yield Footer()

    def on_mount(self) -> None:
        self.window_list = self.query_one("#window-list", WindowSidebar)
        self.window_list.focus()
        self.windows.start()

    async def on_unmount(self) -> None:
        # The polling timer must not outlive the screen
        await self.windows.close()

    async def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "window-filter" and self.window_list:
            event.stop()
            await self.window_list.set_filter(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "window-filter" and self.window_list:
            event.stop()
            self.window_list.focus()

    async def _on_windows_updated(self, windows: Tuple[WindowInfo, ...]) -> None:
        if self.windows.last_error is None:
            self._error_shown = False
        if self.window_list:
            await self.window_list.update_records(list(windows))

    def _on_windows_error(self, error: Exception) -> None:
        # One message per failure streak, not one per tick
        if not self._error_shown:
            self._error_shown = True
            self.app.notify(str(error), title="Error loading windows", severity="error")

    def _selected(self) -> Optional[WindowInfo]:
        return self.window_list.get_selected_window() if self.window_list else None

    def _mutate(self, operation, success: str) -> None:
        self.app.start_mutation(operation, success, self.windows.refresh)

    def action_back(self) -> None:
        self.app.pop_screen()

    def action_cursor_up(self) -> None:
        if self.window_list:
            self.window_list.select_previous()

    def action_cursor_down(self) -> None:
        if self.window_list:
            self.window_list.select_next()

    def action_refresh(self) -> None:
        self.app.start_refresh(self.windows.refresh())

    def action_switch_window(self) -> None:
        window = self._selected()
        if window:
            self._mutate(self.tmux_interface.switch_client(window.id), f"Switched to {window.name}")

    def action_new_window(self) -> None:
        def create(name: Optional[str]) -> None:
            if name:
                self._mutate(
                    self.tmux_interface.new_window(self.session_name, name),
                    f"Created window {name}",
                )

        self.app.push_screen(NameInputScreen("Create window", placeholder="Window name"), create)

    def action_rename_window(self) -> None:
        window = self._selected()
        if not window:
            return

        def rename(name: Optional[str]) -> None:
            if name and name != window.name:
                self._mutate(
                    self.tmux_interface.rename_window(window.id, name),
                    f"Renamed window to {name}",
                )

        self.app.push_screen(
            NameInputScreen(f"Rename window '{window.name}'", value=window.name), rename
        )

    def action_delete_window(self) -> None:
        window = self._selected()
        if not window:
            return

        def delete(confirmed: bool) -> None:
            if confirmed:
                self._mutate(self.tmux_interface.kill_window(window.id), "Deleted window")

        self.app.push_screen(
            DeleteConfirmScreen(f"Delete window '{window.name}'?"), delete
        )

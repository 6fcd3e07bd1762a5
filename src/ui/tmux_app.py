"""TMuxApp: session directory TUI"""

from typing import Awaitable, Callable, Optional, Tuple

from textual.app import App
from textual.binding import Binding
from textual.widgets import Footer, Header, Input

from models.session_info import SessionInfo
from models.settings import Settings
from lib.directory import SessionDirectory
from lib.tmux_errors import TMuxError
from lib.tmux_interface import TMuxInterface
from ui.dialogs import CreateSessionScreen, DeleteConfirmScreen, NameInputScreen
from ui.session_sidebar import SessionSidebar
from ui.window_list import WindowListScreen

# Worker groups. Neither is exclusive: every mutation reports its own outcome
# and directories already serialize refreshes.
MUTATION_GROUP = "mutation"
REFRESH_GROUP = "refresh"


class TMuxApp(App[None]):
    """Main Textual application with tmux session management"""

    TITLE = "tmux sessions"
    # Start on the list, not the search box
    AUTO_FOCUS = "SessionSidebar"

    BINDINGS = [
        # Sidebar actions use simple letter keys; they only fire when sidebar is focused.
        Binding("enter", "switch_session", "Switch"),
        Binding("w", "manage_windows", "Windows"),
        Binding("n", "new_session", "New Session"),
        Binding("e", "rename_session", "Rename Session"),
        Binding("d", "delete_session", "Delete Session"),
        Binding("ctrl+r", "refresh", "Refresh"),
        Binding("q", "quit", "Quit"),
        Binding("up", "sidebar_up", "Select Previous", show=False),
        Binding("down", "sidebar_down", "Select Next", show=False),
    ]

    CSS = """
    SessionSidebar, WindowSidebar {
        height: 1fr;
        border: round $primary;
    }

    SessionSidebar:focus-within, WindowSidebar:focus-within {
        border: round $accent;
    }

    SessionEntry {
        height: 2;
        margin: 0 0 1 0;
    }

    WindowEntry {
        height: 1;
    }

    SessionEntry.--active, WindowEntry.--active {
        color: $success;
    }

    SessionEntry.--selected, WindowEntry.--selected {
        background: $primary 30%;
    }

    .session-header {
        height: 1;
        width: 100%;
        background: $primary 20%;
        color: $primary;
        padding: 0 1;
        text-style: bold;
    }

    DeleteConfirmScreen, NameInputScreen, CreateSessionScreen {
        align: center middle;
    }

    .dialog {
        width: 60;
        height: 11;
        border: thick $background 80%;
        background: $surface;
        padding: 1;
    }

    .dialog.tall {
        height: 14;
    }

    .question {
        width: 100%;
        content-align: center middle;
        text-style: bold;
        margin: 0 0 1 0;
    }

    .warning {
        width: 100%;
        content-align: center middle;
        color: $warning;
        margin: 0 0 1 0;
    }

    .buttons {
        width: 100%;
        height: 3;
        align: center middle;
    }
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        interface: Optional[TMuxInterface] = None,
    ):
        super().__init__()
        self.settings = settings or Settings()
        self.tmux_interface = interface or TMuxInterface(
            tmux_command=self.settings.tmux_command,
            command_timeout=self.settings.command_timeout,
        )
        self.sidebar: Optional[SessionSidebar] = None
        self.sessions = SessionDirectory(
            self.tmux_interface,
            interval=self.settings.refresh_interval,
            on_update=self._on_sessions_updated,
        )

    def compose(self):
        """Compose the application layout"""
        yield Header()
        yield Input(placeholder="Search tmux sessions...", id="session-filter")
        yield SessionSidebar(id="session-sidebar")
        yield Footer()

    def on_mount(self) -> None:
        """Start session polling"""
        self.sidebar = self.query_one("#session-sidebar", SessionSidebar)
        self.sidebar.focus()
        self.sessions.start()

    async def on_unmount(self) -> None:
        """Stop polling before the app goes away"""
        await self.sessions.close()

    async def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "session-filter" and self.sidebar:
            await self.sidebar.set_filter(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "session-filter" and self.sidebar:
            self.sidebar.focus()

    async def _on_sessions_updated(self, sessions: Tuple[SessionInfo, ...]) -> None:
        if self.sidebar:
            await self.sidebar.update_sessions(list(sessions))

    async def run_mutation(
        self,
        operation: Awaitable[None],
        success: str,
        refresh: Callable[[], Awaitable[object]],
    ) -> bool:
        """Await a mutation, report the outcome and refresh on success"""
        try:
            await operation
        except TMuxError as e:
            self.notify(str(e), title="Command failed", severity="error")
            return False
        self.notify(success)
        await refresh()
        return True

    def _sidebar_selection(self) -> Optional[SessionInfo]:
        # Only when sidebar is focused
        if not self.sidebar or self.focused is not self.sidebar:
            return None
        return self.sidebar.get_selected_session()

    def start_mutation(
        self,
        operation: Awaitable[None],
        success: str,
        refresh: Callable[[], Awaitable[object]],
    ) -> None:
        self.run_worker(self.run_mutation(operation, success, refresh), group=MUTATION_GROUP)

    def start_refresh(self, refresh: Awaitable[object]) -> None:
        self.run_worker(refresh, group=REFRESH_GROUP)

    def _mutate(self, operation: Awaitable[None], success: str) -> None:
        self.start_mutation(operation, success, self.sessions.refresh)

    def action_sidebar_up(self) -> None:
        """Move selection up in sidebar (only when sidebar is focused)"""
        if self.sidebar and self.focused is self.sidebar:
            self.sidebar.select_previous()

    def action_sidebar_down(self) -> None:
        """Move selection down in sidebar (only when sidebar is focused)"""
        if self.sidebar and self.focused is self.sidebar:
            self.sidebar.select_next()

    def action_refresh(self) -> None:
        self.start_refresh(self.sessions.refresh())

    def action_switch_session(self) -> None:
        session = self._sidebar_selection()
        if session:
            self._mutate(
                self.tmux_interface.switch_client(session.name),
                f"Switched to {session.name}",
            )

    def action_manage_windows(self) -> None:
        session = self._sidebar_selection()
        if session:
            self.push_screen(
                WindowListScreen(
                    session.name,
                    self.tmux_interface,
                    interval=self.settings.window_refresh_interval,
                )
            )

    def action_new_session(self) -> None:
        if not self.sidebar or self.focused is not self.sidebar:
            return

        def create(values: Optional[Tuple[str, str]]) -> None:
            if values:
                name, directory = values
                self._mutate(
                    self.tmux_interface.create_session(name, directory),
                    f"Created session {name}",
                )

        self.push_screen(CreateSessionScreen(), create)

    def action_rename_session(self) -> None:
        """Prompt to rename the currently selected session"""
        session = self._sidebar_selection()
        if not session:
            return

        def rename(new_name: Optional[str]) -> None:
            if new_name:
                self.run_worker(
                    self.handle_rename_confirm(session.name, new_name), group=MUTATION_GROUP
                )

        self.push_screen(
            NameInputScreen(
                f"Rename session '{session.name}'",
                value=session.name,
                placeholder="New session name",
            ),
            rename,
        )

    async def handle_rename_confirm(self, old_name: str, new_name: str) -> None:
        """Rename, refresh, and keep the renamed session selected"""
        if not new_name or new_name == old_name:
            return
        renamed = await self.run_mutation(
            self.tmux_interface.rename_session(old_name, new_name),
            f"Renamed session to {new_name}",
            self.sessions.refresh,
        )
        if renamed and self.sidebar:
            self.sidebar.select_session(new_name)
            self.sidebar.focus()

    def action_delete_session(self) -> None:
        """Delete the currently selected session with confirmation"""
        session = self._sidebar_selection()
        if not session:
            return

        def delete(confirmed: bool) -> None:
            if confirmed:
                self._mutate(
                    self.tmux_interface.kill_session(session.name), "Deleted session"
                )

        self.push_screen(DeleteConfirmScreen(f"Delete session '{session.name}'?"), delete)

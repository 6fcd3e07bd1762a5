"""Selectable lists of session and window entries"""

import asyncio
from typing import Any, List, Optional

from textual.widget import Widget
from textual.containers import Vertical, VerticalScroll

from models.session_info import SessionInfo
from models.window_info import WindowInfo
from ui.session_entry import RecordEntry, SessionEntry, WindowEntry


class RecordSidebar(Widget):
    """Focusable list that keeps its selection across refreshes"""

    # Make this widget focusable
    can_focus = True

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._all_records: List[Any] = []
        self._filter_text = ""
        self._records: List[Any] = []
        self._entries: List[RecordEntry] = []
        self._selected_index: int = -1
        self._render_lock: Optional[asyncio.Lock] = None

    def compose(self):
        """Compose the sidebar layout"""
        with Vertical():
            yield VerticalScroll(classes="record-list")

    def _make_entry(self, record: Any) -> RecordEntry:
        raise NotImplementedError

    def _key(self, record: Any) -> str:
        raise NotImplementedError

    def _search_text(self, record: Any) -> str:
        return self._key(record)

    @property
    def records(self) -> List[Any]:
        """Records currently shown, after filtering"""
        return list(self._records)

    async def update_records(self, records: List[Any]) -> None:
        """Replace the displayed records with a new snapshot"""
        self._all_records = list(records)
        await self._show_records()

    async def set_filter(self, text: str) -> None:
        """Show only records whose text contains ``text`` (case-insensitive)"""
        self._filter_text = text.strip().lower()
        await self._show_records()

    async def _show_records(self) -> None:
        # Snapshot updates and filter edits both rebuild the entries
        if self._render_lock is None:
            self._render_lock = asyncio.Lock()
        async with self._render_lock:
            await self._rebuild_entries()

    async def _rebuild_entries(self) -> None:
        # Remember previously selected record if any
        selected = self.get_selected()
        prev_key = self._key(selected) if selected is not None else None

        self._records = [
            record for record in self._all_records
            if self._filter_text in self._search_text(record).lower()
        ]

        # Clear existing entries
        record_list = self.query_one(".record-list")
        await record_list.remove_children()
        self._entries.clear()

        # Create new entries
        for record in self._records:
            entry = self._make_entry(record)
            self._entries.append(entry)
            await record_list.mount(entry)

        # Restore previous selection if possible, else select first
        if self._records:
            if prev_key is None or not self.select_key(prev_key):
                self._selected_index = 0
                self._update_selection()
        else:
            self._selected_index = -1

    def get_selected(self) -> Optional[Any]:
        """Returns currently selected record"""
        if 0 <= self._selected_index < len(self._records):
            return self._records[self._selected_index]
        return None

    def select_key(self, key: str) -> bool:
        """Programmatically selects a record by key"""
        for i, record in enumerate(self._records):
            if self._key(record) == key:
                self._selected_index = i
                self._update_selection()
                return True
        return False

    def select_next(self) -> Optional[Any]:
        """Moves selection to next record in list"""
        if not self._records:
            return None

        self._selected_index = (self._selected_index + 1) % len(self._records)
        self._update_selection()
        return self.get_selected()

    def select_previous(self) -> Optional[Any]:
        """Moves selection to previous record in list"""
        if not self._records:
            return None

        self._selected_index = (self._selected_index - 1) % len(self._records)
        self._update_selection()
        return self.get_selected()

    def _update_selection(self):
        """Update visual selection state of entries"""
        for i, entry in enumerate(self._entries):
            entry.is_selected = (i == self._selected_index)
        if 0 <= self._selected_index < len(self._entries):
            self._entries[self._selected_index].scroll_visible()


class SessionSidebar(RecordSidebar):
    """Left sidebar widget displaying tmux session list"""

    def _make_entry(self, record: SessionInfo) -> RecordEntry:
        return SessionEntry(session_info=record)

    def _key(self, record: SessionInfo) -> str:
        return record.name

    def _search_text(self, record: SessionInfo) -> str:
        return f"{record.name} {record.current_window}"

    async def update_sessions(self, sessions: List[SessionInfo]) -> None:
        """Updates sidebar with new session list from tmux"""
        await self.update_records(sessions)

    def get_selected_session(self) -> Optional[SessionInfo]:
        """Returns currently selected session in sidebar"""
        return self.get_selected()

    def select_session(self, session_name: str) -> bool:
        return self.select_key(session_name)


class WindowSidebar(RecordSidebar):
    """Window list of one session, in tmux order"""

    def _make_entry(self, record: WindowInfo) -> RecordEntry:
        return WindowEntry(window_info=record)

    def _key(self, record: WindowInfo) -> str:
        # Window ids survive renames and index shifts
        return record.id

    def _search_text(self, record: WindowInfo) -> str:
        return f"{record.index}: {record.name}"

    def get_selected_window(self) -> Optional[WindowInfo]:
        return self.get_selected()

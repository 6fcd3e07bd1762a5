"""Polling directories of tmux sessions and windows.

A directory owns the current snapshot (an immutable tuple of records) and
replaces it wholesale on every refresh. Refreshes are serialized through one
lock so results are applied in the order they were issued; timer ticks that
find a refresh already outstanding are skipped instead of queued.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar

from models.session_info import SessionInfo
from models.window_info import WindowInfo
from models.settings import DEFAULT_REFRESH_INTERVAL, DEFAULT_WINDOW_REFRESH_INTERVAL
from lib.tmux_errors import TMuxError
from lib.tmux_interface import TMuxInterface

logger = logging.getLogger(__name__)

T = TypeVar("T")

UpdateCallback = Callable[[Tuple[Any, ...]], Any]
ErrorCallback = Callable[[Exception], Any]


async def _call(callback: Optional[Callable[..., Any]], *args: Any) -> None:
    if callback is None:
        return
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class Directory(Generic[T]):
    """Base class: snapshot ownership, refresh serialization and polling"""

    def __init__(
        self,
        interval: float,
        on_update: Optional[UpdateCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.on_update = on_update
        self.on_error = on_error
        self._snapshot: Tuple[T, ...] = ()
        self._loaded = False
        self._lock: Optional[asyncio.Lock] = None
        self._pending = 0
        self._task: Optional[asyncio.Task] = None
        self._closed = False

    async def _fetch(self) -> List[T]:
        raise NotImplementedError

    @property
    def snapshot(self) -> Tuple[T, ...]:
        return self._snapshot

    @property
    def loaded(self) -> bool:
        """Whether at least one refresh has completed"""
        return self._loaded

    @property
    def refreshing(self) -> bool:
        return self._pending > 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def closed(self) -> bool:
        return self._closed

    def list(self) -> List[T]:
        return list(self._snapshot)

    def _get_lock(self) -> asyncio.Lock:
        # Created lazily so the lock binds to the loop that first uses it
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    async def refresh(self) -> Tuple[T, ...]:
        """Fetch a fresh listing and replace the snapshot.

        Concurrent callers wait their turn; each applies its own result.
        """
        self._pending += 1
        try:
            async with self._get_lock():
                records = await self._fetch()
                await self._apply(tuple(records))
        finally:
            self._pending -= 1
        return self._snapshot

    async def poll(self) -> bool:
        """Timer tick: refresh unless one is already outstanding"""
        if self.refreshing:
            logger.debug("%s: refresh in flight, skipping tick", self)
            return False
        await self.refresh()
        return True

    async def _apply(self, records: Tuple[T, ...]) -> None:
        changed = not self._loaded or records != self._snapshot
        self._snapshot = records
        self._loaded = True
        if changed and not self._closed:
            await _call(self.on_update, records)

    async def _report_error(self, error: Exception) -> None:
        if not self._closed:
            await _call(self.on_error, error)

    def start(self) -> None:
        """Start polling: one refresh now, then one every interval seconds"""
        if self._closed:
            raise RuntimeError(f"{self} is closed")
        if self.running:
            return
        self._task = asyncio.create_task(self._refresh_loop())

    async def _refresh_loop(self) -> None:
        while True:
            try:
                await self.poll()
            except Exception:
                logger.exception("%s: refresh failed", self)
            await asyncio.sleep(self.interval)

    async def close(self) -> None:
        """Stop polling; no callbacks fire afterwards"""
        self._closed = True
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def __aenter__(self):
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


class SessionDirectory(Directory[SessionInfo]):
    """All sessions, attached first then most recently used.

    A missing tmux server shows up as an empty snapshot, never an error.
    """

    def __init__(
        self,
        interface: TMuxInterface,
        interval: float = DEFAULT_REFRESH_INTERVAL,
        on_update: Optional[UpdateCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ):
        super().__init__(interval, on_update=on_update, on_error=on_error)
        self.interface = interface

    async def _fetch(self) -> List[SessionInfo]:
        return await self.interface.list_sessions()

    def __repr__(self) -> str:
        return "SessionDirectory()"


class WindowDirectory(Directory[WindowInfo]):
    """Windows of one session, in tmux order.

    Listing failures empty the snapshot, are stored in ``last_error`` and
    passed to ``on_error``: an open window view expects its session to exist.
    """

    def __init__(
        self,
        interface: TMuxInterface,
        session_name: str,
        interval: float = DEFAULT_WINDOW_REFRESH_INTERVAL,
        on_update: Optional[UpdateCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ):
        super().__init__(interval, on_update=on_update, on_error=on_error)
        self.interface = interface
        self.session_name = session_name
        self.last_error: Optional[TMuxError] = None

    async def _fetch(self) -> List[WindowInfo]:
        try:
            windows = await self.interface.list_windows(self.session_name)
        except TMuxError as e:
            logger.warning("listing windows of %s failed: %s", self.session_name, e)
            self.last_error = e
            await self._report_error(e)
            return []
        self.last_error = None
        return windows

    def __repr__(self) -> str:
        return f"WindowDirectory({self.session_name!r})"

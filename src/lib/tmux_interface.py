"""TMux listing and mutation commands"""

import logging
import os
import re
from typing import Awaitable, Callable, List, Optional

from models.session_info import SessionInfo
from models.window_info import WindowInfo
from lib.command import run_command
from lib.tmux_errors import TMuxError, ValidationError
from lib.tmux_format import (
    SESSION_FORMAT,
    WINDOW_FORMAT,
    parse_sessions,
    parse_windows,
)

logger = logging.getLogger(__name__)

Runner = Callable[[str], Awaitable[str]]

# Characters that end or re-open a quoted shell string, plus "$"
_SHELL_SPECIAL = re.compile(r"""(["'`\\$])""")
# Characters still special inside double quotes
_DOUBLE_QUOTE_SPECIAL = re.compile(r"""(["`\\$])""")

DEFAULT_WORKING_DIRECTORY = "~"


def escape_shell_arg(value: str) -> str:
    """Backslash-escape shell metacharacters for use inside double quotes"""
    return _SHELL_SPECIAL.sub(r"\\\1", value)


def quote_arg(value: str) -> str:
    """Double-quote a working directory path with escape_shell_arg"""
    return f'"{escape_shell_arg(value)}"'


def quote_name(value: str) -> str:
    """Double-quote a name, id or target so the shell passes it through unchanged"""
    return '"' + _DOUBLE_QUOTE_SPECIAL.sub(r"\\\1", value) + '"'


def require_name(value: Optional[str], what: str = "name") -> str:
    """Return the stripped value, or raise ValidationError when it is blank"""
    stripped = (value or "").strip()
    if not stripped:
        raise ValidationError(f"{what} must not be empty")
    return stripped


def sort_sessions(sessions: List[SessionInfo]) -> List[SessionInfo]:
    """Attached sessions first, then most recently attached first.

    ``sorted`` is stable, so full ties keep tmux's listing order.
    """
    return sorted(sessions, key=lambda s: (not s.attached, -s.last_attached))


class TMuxInterface:
    """Direct tmux command integration and session queries"""

    def __init__(
        self,
        tmux_command: str = "tmux",
        command_timeout: Optional[float] = None,
        runner: Optional[Runner] = None,
    ):
        self.tmux_command = tmux_command
        self.command_timeout = command_timeout
        self._runner = runner

    async def _run_tmux_command(self, *args: str) -> str:
        """Execute a tmux command line and return its output"""
        command = " ".join([self.tmux_command, *args])
        if self._runner is not None:
            return await self._runner(command)
        return await run_command(command, timeout=self.command_timeout)

    # --- Sessions ---

    async def list_sessions(self) -> List[SessionInfo]:
        """Retrieves all tmux sessions, attached first then most recent.

        A missing tmux server is a normal state and yields an empty list.
        """
        try:
            output = await self._run_tmux_command(
                "list-sessions", "-F", quote_name(SESSION_FORMAT)
            )
        except TMuxError as e:
            logger.debug("list-sessions failed, treating as no sessions: %s", e)
            return []
        return sort_sessions(parse_sessions(output))

    async def create_session(
        self, name: str, working_directory: str = DEFAULT_WORKING_DIRECTORY
    ) -> None:
        """Creates a detached session rooted at working_directory"""
        name = require_name(name, "Session name")
        directory = (working_directory or "").strip() or DEFAULT_WORKING_DIRECTORY
        # Quoted arguments reach tmux without tilde expansion
        directory = os.path.expanduser(directory)
        await self._run_tmux_command(
            "new-session", "-d", "-s", quote_name(name), "-c", quote_arg(directory)
        )
        logger.info("created session %s in %s", name, directory)

    async def rename_session(self, old_name: str, new_name: str) -> None:
        old_name = require_name(old_name, "Session name")
        new_name = require_name(new_name, "New session name")
        await self._run_tmux_command(
            "rename-session", "-t", quote_name(old_name), quote_name(new_name)
        )
        logger.info("renamed session %s to %s", old_name, new_name)

    async def kill_session(self, name: str) -> None:
        """Terminates specified tmux session"""
        name = require_name(name, "Session name")
        await self._run_tmux_command("kill-session", "-t", quote_name(name))
        logger.info("killed session %s", name)

    async def switch_client(self, target: str) -> None:
        """Switches the attached client to a session name or window id"""
        target = require_name(target, "Target")
        await self._run_tmux_command("switch-client", "-t", quote_name(target))

    # --- Windows ---

    async def list_windows(self, session_name: str) -> List[WindowInfo]:
        """Lists a session's windows in tmux order.

        Unlike list_sessions, failures propagate: the caller asked about a
        session it expects to exist.
        """
        session_name = require_name(session_name, "Session name")
        output = await self._run_tmux_command(
            "list-windows", "-t", quote_name(session_name), "-F", quote_name(WINDOW_FORMAT)
        )
        return parse_windows(output, session_name)

    async def new_window(self, session_name: str, name: str) -> None:
        session_name = require_name(session_name, "Session name")
        name = require_name(name, "Window name")
        await self._run_tmux_command(
            "new-window", "-t", quote_name(session_name), "-n", quote_name(name)
        )
        logger.info("created window %s in session %s", name, session_name)

    async def rename_window(self, window_id: str, name: str) -> None:
        window_id = require_name(window_id, "Window id")
        name = require_name(name, "Window name")
        await self._run_tmux_command(
            "rename-window", "-t", quote_name(window_id), quote_name(name)
        )
        logger.info("renamed window %s to %s", window_id, name)

    async def kill_window(self, window_id: str) -> None:
        window_id = require_name(window_id, "Window id")
        await self._run_tmux_command("kill-window", "-t", quote_name(window_id))
        logger.info("killed window %s", window_id)

    # --- Server ---

    async def is_tmux_running(self) -> bool:
        """Checks if tmux server is active"""
        try:
            await self._run_tmux_command("list-sessions")
            return True
        except TMuxError:
            return False

    async def get_tmux_version(self) -> str:
        """Gets tmux version string"""
        output = await self._run_tmux_command("-V")
        # Output format: "tmux 3.3a"
        output = output.strip()
        return output.split()[-1] if output else "unknown"

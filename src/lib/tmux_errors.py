"""TMux-related exception classes."""

from typing import Optional


class TMuxError(Exception):
    """Base exception for all TMux-related errors."""
    pass


class CommandExecutionError(TMuxError):
    """Raised when a tmux command exits non-zero or cannot be spawned."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class TMuxNotRunningError(CommandExecutionError):
    """Raised when no tmux server is running."""
    pass


class TMuxNotFoundError(CommandExecutionError):
    """Raised when the tmux binary cannot be found."""
    pass


class ValidationError(TMuxError, ValueError):
    """Raised when a name or identifier is empty after trimming."""
    pass

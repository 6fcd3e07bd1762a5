"""Shell command execution for tmux invocations."""

import asyncio
import logging
import os
import signal
from typing import Optional

from lib.tmux_errors import (
    CommandExecutionError,
    TMuxNotFoundError,
    TMuxNotRunningError,
)

logger = logging.getLogger(__name__)

# Shell exit status for "command not found"
COMMAND_NOT_FOUND = 127

NOT_RUNNING_MARKERS = ("no server running", "error connecting to")


async def _terminate(process: asyncio.subprocess.Process) -> None:
    """Kill the process group of a still-running child and reap it"""
    if process.returncode is None:
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
    await process.wait()


async def run_command(command: str, timeout: Optional[float] = None) -> str:
    """Run a shell command line and return its standard output.

    The command line is handed to the shell as-is; callers must escape any
    interpolated values. With ``timeout=None`` a hung process blocks the
    caller indefinitely.
    """
    logger.debug("exec: %s", command)
    try:
        process = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            # Own process group, so the whole pipeline can be killed at once
            start_new_session=True,
        )
    except OSError as e:
        raise CommandExecutionError(
            f"Failed to spawn command: {e}", command=command
        ) from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        await _terminate(process)
        raise CommandExecutionError(
            f"Command timed out after {timeout}s", command=command
        )
    except BaseException:
        # Cancelled while waiting: the child must not outlive the caller
        await _terminate(process)
        raise

    out = stdout.decode("utf-8", errors="replace")
    if process.returncode != 0:
        error_msg = stderr.decode("utf-8", errors="replace").strip()
        message = error_msg or f"Command exited with status {process.returncode}"
        lowered = error_msg.lower()
        if any(marker in lowered for marker in NOT_RUNNING_MARKERS):
            error_cls = TMuxNotRunningError
        elif process.returncode == COMMAND_NOT_FOUND:
            error_cls = TMuxNotFoundError
        else:
            error_cls = CommandExecutionError
        raise error_cls(
            message,
            command=command,
            returncode=process.returncode,
            stderr=error_msg,
        )
    return out

import asyncio
import os

import pytest

from lib.command import run_command
from lib.tmux_errors import (
    CommandExecutionError,
    TMuxNotFoundError,
    TMuxNotRunningError,
)


async def test_returns_stdout():
    assert await run_command("echo hello") == "hello\n"


async def test_nonzero_exit_raises_with_stderr():
    with pytest.raises(CommandExecutionError) as excinfo:
        await run_command("echo 'bad target' >&2; exit 3")

    error = excinfo.value
    assert error.returncode == 3
    assert error.stderr == "bad target"
    assert str(error) == "bad target"
    assert error.command == "echo 'bad target' >&2; exit 3"


async def test_nonzero_exit_without_stderr():
    with pytest.raises(CommandExecutionError, match="status 4"):
        await run_command("exit 4")


async def test_no_server_is_reported_as_not_running():
    with pytest.raises(TMuxNotRunningError):
        await run_command("echo 'no server running on /tmp/tmux-0/default' >&2; exit 1")


async def test_missing_binary():
    with pytest.raises(TMuxNotFoundError) as excinfo:
        await run_command("definitely-not-a-real-tmux-binary list-sessions")
    assert excinfo.value.returncode == 127


async def test_optional_timeout_kills_process():
    with pytest.raises(CommandExecutionError, match="timed out"):
        await run_command("sleep 5", timeout=0.1)


async def test_cancelled_command_kills_and_reaps_child(tmp_path):
    pidfile = tmp_path / "pid"
    task = asyncio.create_task(run_command(f"echo $$ > {pidfile}; exec sleep 37"))
    for _ in range(500):
        if pidfile.exists() and pidfile.read_text().strip():
            break
        await asyncio.sleep(0.01)
    pid = int(pidfile.read_text())

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    with pytest.raises(ProcessLookupError):
        os.kill(pid, 0)

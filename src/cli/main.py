"""Command line entry point: TUI launcher and one-shot tmux commands"""

import asyncio
import logging
from typing import Optional

import click

from models.settings import (
    DEFAULT_REFRESH_INTERVAL,
    DEFAULT_WINDOW_REFRESH_INTERVAL,
    Settings,
)
from lib.path_suggestions import get_path_suggestions
from lib.tmux_errors import TMuxError
from lib.tmux_interface import TMuxInterface

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def configure_logging(level: str, log_file: Optional[str] = None, tui: bool = False) -> None:
    """Route log records to a file, the Textual console, or stderr"""
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file)
    elif tui:
        # Plain stderr output would draw over the screen
        from textual.logging import TextualHandler
        handler = TextualHandler()
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)


def make_interface(settings: Settings) -> TMuxInterface:
    return TMuxInterface(
        tmux_command=settings.tmux_command,
        command_timeout=settings.command_timeout,
    )


def run_tmux(coro):
    """Run a tmux coroutine, turning failures into a single CLI error"""
    try:
        return asyncio.run(coro)
    except TMuxError as e:
        logger.debug("tmux command failed: %r", e)
        raise click.ClickException(str(e))


pass_settings = click.make_pass_decorator(Settings)


@click.group(invoke_without_command=True, context_settings={"auto_envvar_prefix": "TMUX_DIRECTORY"})
@click.option('--refresh-interval', default=DEFAULT_REFRESH_INTERVAL, show_default=True,
              type=click.FloatRange(min=0.1), help='How often to poll the session list (seconds)')
@click.option('--window-refresh-interval', default=DEFAULT_WINDOW_REFRESH_INTERVAL, show_default=True,
              type=click.FloatRange(min=0.1), help='How often to poll a window list (seconds)')
@click.option('--tmux-command', default="tmux", show_default=True, help='tmux executable to invoke')
@click.option('--command-timeout', default=None, type=click.FloatRange(min=0.1),
              help='Kill tmux commands running longer than this (seconds); unlimited by default')
@click.option('--log-level', default="WARNING", show_default=True,
              type=click.Choice(LOG_LEVELS, case_sensitive=False))
@click.option('--log-file', default=None, type=click.Path(dir_okay=False), help='Write logs to this file')
@click.pass_context
def main(ctx: click.Context, refresh_interval: float, window_refresh_interval: float,
         tmux_command: str, command_timeout: Optional[float], log_level: str,
         log_file: Optional[str]):
    """Browse and manage tmux sessions and windows.

    Without a subcommand the interactive session list is launched.
    """
    settings = Settings(
        tmux_command=tmux_command,
        refresh_interval=refresh_interval,
        window_refresh_interval=window_refresh_interval,
        command_timeout=command_timeout,
        log_level=log_level,
        log_file=log_file,
    )
    ctx.obj = settings
    configure_logging(log_level, log_file, tui=ctx.invoked_subcommand is None)
    if ctx.invoked_subcommand is None:
        from ui.tmux_app import TMuxApp
        TMuxApp(settings=settings).run()


@main.command("ls")
@pass_settings
def list_sessions(settings: Settings):
    """List sessions, attached first then most recently used."""
    sessions = run_tmux(make_interface(settings).list_sessions())
    if not sessions:
        click.echo("No tmux sessions")
        return
    for session in sessions:
        state = "attached" if session.attached else "detached"
        click.echo(
            f"{session.name}\t{session.window_count} win\t{session.pane_count} panes"
            f"\t{state}\t{session.current_window}"
        )


@main.command("windows")
@click.argument("session")
@pass_settings
def list_windows(settings: Settings, session: str):
    """List the windows of SESSION in tmux order."""
    windows = run_tmux(make_interface(settings).list_windows(session))
    for window in windows:
        marker = "*" if window.active else " "
        click.echo(f"{marker} {window.index}: {window.name}\t{window.id}")


@main.command("new")
@click.argument("name")
@click.option("-c", "--directory", default="~", show_default=True, help="Working directory")
@pass_settings
def new_session(settings: Settings, name: str, directory: str):
    """Create a detached session NAME."""
    run_tmux(make_interface(settings).create_session(name, directory))
    click.echo(f"Created session {name.strip()}")


@main.command("rename")
@click.argument("old_name")
@click.argument("new_name")
@pass_settings
def rename_session(settings: Settings, old_name: str, new_name: str):
    """Rename session OLD_NAME to NEW_NAME."""
    run_tmux(make_interface(settings).rename_session(old_name, new_name))
    click.echo(f"Renamed session to {new_name.strip()}")


@main.command("kill")
@click.argument("name")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@pass_settings
def kill_session(settings: Settings, name: str, yes: bool):
    """Delete session NAME."""
    if not yes:
        click.confirm(f'Delete session "{name}"?', abort=True)
    run_tmux(make_interface(settings).kill_session(name))
    click.echo("Deleted session")


@main.command("switch")
@click.argument("target")
@pass_settings
def switch(settings: Settings, target: str):
    """Switch the attached client to a session name or window id."""
    run_tmux(make_interface(settings).switch_client(target))
    click.echo(f"Switched to {target.strip()}")


@main.command("new-window")
@click.argument("session")
@click.argument("name")
@pass_settings
def new_window(settings: Settings, session: str, name: str):
    """Create window NAME in SESSION."""
    run_tmux(make_interface(settings).new_window(session, name))
    click.echo(f"Created window {name.strip()}")


@main.command("rename-window")
@click.argument("window_id")
@click.argument("name")
@pass_settings
def rename_window(settings: Settings, window_id: str, name: str):
    """Rename the window with id WINDOW_ID (e.g. @3)."""
    run_tmux(make_interface(settings).rename_window(window_id, name))
    click.echo(f"Renamed window to {name.strip()}")


@main.command("kill-window")
@click.argument("window_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@pass_settings
def kill_window(settings: Settings, window_id: str, yes: bool):
    """Delete the window with id WINDOW_ID."""
    if not yes:
        click.confirm(f'Delete window "{window_id}"?', abort=True)
    run_tmux(make_interface(settings).kill_window(window_id))
    click.echo("Deleted window")


@main.command("suggest")
@click.argument("query")
@click.option("--limit", default=20, show_default=True, type=click.IntRange(min=1))
def suggest(query: str, limit: int):
    """Suggest working directories matching QUERY (needs fd and fzf)."""
    for suggestion in asyncio.run(get_path_suggestions(query, limit=limit)):
        click.echo(suggestion.path)


@main.command("info")
@pass_settings
def info(settings: Settings):
    """Show the tmux version and whether a server is running."""
    interface = make_interface(settings)
    version = run_tmux(interface.get_tmux_version())
    running = asyncio.run(interface.is_tmux_running())
    click.echo(f"tmux {version}")
    click.echo("server: running" if running else "server: not running")


if __name__ == "__main__":
    main()

import asyncio

from textual.widgets import Input

from lib.tmux_interface import TMuxInterface
from models.settings import Settings
from ui.tmux_app import TMuxApp
from ui.window_list import WindowListScreen

SESSIONS_OUTPUT = (
    "infra|||1|||0|||1699000000|||main|||1|||1699000100\n"
    "web|||2|||1|||1700000000|||editor|||3|||1700003600\n"
)
WINDOWS_OUTPUT = "@1|||0|||editor|||1|||l\n@2|||1|||logs|||0|||l\n"


class RoutingRunner:
    """Answers listing commands and records mutations"""

    def __init__(self):
        self.commands = []

    async def __call__(self, command: str) -> str:
        self.commands.append(command)
        if " list-sessions " in command:
            return SESSIONS_OUTPUT
        if " list-windows " in command:
            return WINDOWS_OUTPUT
        return ""


def make_app(runner):
    settings = Settings(refresh_interval=60.0, window_refresh_interval=60.0)
    return TMuxApp(settings=settings, interface=TMuxInterface(runner=runner))


async def test_sessions_listed_and_timer_stopped_on_exit():
    app = make_app(RoutingRunner())
    async with app.run_test() as pilot:
        await app.sessions.refresh()
        await pilot.pause()
        assert [s.name for s in app.sessions.snapshot] == ["web", "infra"]
        assert app.sidebar.get_selected_session().name == "web"
        assert app.sessions.running
    assert app.sessions.closed
    assert not app.sessions.running


async def test_window_screen_owns_its_timer():
    runner = RoutingRunner()
    app = make_app(runner)
    async with app.run_test() as pilot:
        await app.sessions.refresh()
        await pilot.pause()

        await pilot.press("w")
        await pilot.pause()
        screen = app.screen
        assert isinstance(screen, WindowListScreen)
        assert screen.session_name == "web"

        await screen.windows.refresh()
        assert [w.id for w in screen.windows.snapshot] == ["@1", "@2"]
        assert screen.windows.running

        await pilot.press("escape")
        await pilot.pause()
        await pilot.pause()
        assert not isinstance(app.screen, WindowListScreen)
        assert screen.windows.closed


class SlowKillRunner(RoutingRunner):
    """Holds kill-session until released"""

    def __init__(self):
        super().__init__()
        self.release = asyncio.Event()

    async def __call__(self, command: str) -> str:
        if " kill-session " in command:
            await self.release.wait()
        return await super().__call__(command)


async def test_refresh_does_not_cancel_running_mutation():
    runner = SlowKillRunner()
    app = make_app(runner)
    messages = []
    async with app.run_test() as pilot:
        app.notify = lambda message, **kwargs: messages.append(message)
        await app.sessions.refresh()
        await pilot.pause()

        app._mutate(app.tmux_interface.kill_session("web"), "Deleted session")
        await pilot.pause()
        await pilot.press("ctrl+r")
        await pilot.pause()

        runner.release.set()
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert messages == ["Deleted session"]
        kill = runner.commands.index('tmux kill-session -t "web"')
        # The mutation still triggers its own refresh afterwards
        assert any(" list-sessions " in c for c in runner.commands[kill + 1:])


async def test_search_filters_session_list():
    app = make_app(RoutingRunner())
    async with app.run_test() as pilot:
        await app.sessions.refresh()
        await pilot.pause()
        search = app.query_one("#session-filter", Input)

        search.value = "INF"
        await pilot.pause()
        await pilot.pause()
        assert [s.name for s in app.sidebar.records] == ["infra"]
        assert app.sidebar.get_selected_session().name == "infra"

        search.value = ""
        await pilot.pause()
        await pilot.pause()
        assert [s.name for s in app.sidebar.records] == ["web", "infra"]

from lib.path_suggestions import PathSuggestion, get_path_suggestions
from lib.tmux_errors import CommandExecutionError


async def test_suggestions_from_fzf_output(fake_runner):
    runner = fake_runner(["/home/me/src/api\n/home/me/work/web app/\n\n"])
    suggestions = await get_path_suggestions("api", runner=runner)

    assert suggestions == [
        PathSuggestion(path="/home/me/src/api", name="api"),
        PathSuggestion(path="/home/me/work/web app/", name="web app"),
    ]
    assert runner.commands == ['fd -t d . ~ | fzf -f "api" | head -n 20']


async def test_query_is_escaped(fake_runner):
    runner = fake_runner()
    await get_path_suggestions('a"; rm -rf ~; echo "', runner=runner, limit=5)
    assert runner.commands == ['fd -t d . ~ | fzf -f "a\\"; rm -rf ~; echo \\"" | head -n 5']


async def test_empty_query_runs_nothing(fake_runner):
    runner = fake_runner()
    assert await get_path_suggestions("   ", runner=runner) == []
    assert runner.commands == []


async def test_failures_yield_no_suggestions(fake_runner):
    runner = fake_runner(error=CommandExecutionError("fd: command not found", returncode=127))
    assert await get_path_suggestions("api", runner=runner) == []

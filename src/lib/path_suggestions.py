"""Working-directory suggestions for new sessions, via fd and fzf."""

import logging
import os
from dataclasses import dataclass
from typing import List

from lib.command import run_command
from lib.tmux_errors import TMuxError
from lib.tmux_interface import Runner, quote_name

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20


@dataclass(frozen=True)
class PathSuggestion:
    path: str
    name: str
    type: str = "directory"


async def get_path_suggestions(
    query: str, runner: Runner = run_command, limit: int = DEFAULT_LIMIT
) -> List[PathSuggestion]:
    """Fuzzy-match directories under the home directory.

    Returned paths are raw strings; whoever builds a command from them
    escapes them.
    """
    query = (query or "").strip()
    if not query:
        return []
    command = f"fd -t d . ~ | fzf -f {quote_name(query)} | head -n {int(limit)}"
    try:
        output = await runner(command)
    except TMuxError as e:
        logger.debug("path suggestion lookup failed: %s", e)
        return []
    suggestions = []
    for line in output.split("\n"):
        path = line.strip()
        if not path:
            continue
        name = os.path.basename(path.rstrip("/")) or path
        suggestions.append(PathSuggestion(path=path, name=name))
    return suggestions

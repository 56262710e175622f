"""Terminal front end for a comparison session."""

import logging
from collections.abc import Callable

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from animelo.models.elo import Side
from animelo.session.controller import SessionController, SessionState
from animelo.tui.keys import translate_key

logger = logging.getLogger(__name__)

HELP_TEXT = "↑/k ↓/j move · enter/space pick · ←/h pick top · →/l pick bottom · q quit"


def _anime_panel(title: str, focused: bool) -> Panel:
    marker = "▶ " if focused else "  "
    return Panel(
        Text(marker + title, style="bold" if focused else ""),
        border_style="cyan" if focused else "dim",
    )


def render_matchup(controller: SessionController) -> RenderableType:
    """Render both anime with the focus indicator and key help."""
    matchup = controller.matchup
    return Group(
        Text(f"Which is better?  ({controller.decisions} decided)", style="bold"),
        _anime_panel(matchup.up.title, controller.focus is Side.UP),
        _anime_panel(matchup.down.title, controller.focus is Side.DOWN),
        Text(HELP_TEXT, style="dim"),
    )


def run_session(
    controller: SessionController,
    console: Console,
    read_key: Callable[[], str],
) -> int:
    """Run the interactive loop until the user quits.

    Args:
        controller: Session to drive; started here
        console: Console to render on
        read_key: Blocking function returning the next raw key press

    Returns:
        Number of decisions made

    Raises:
        InsufficientCandidatesError: If there is nothing to compare
    """
    controller.start()

    while controller.state is not SessionState.TERMINATED:
        console.clear()
        console.print(render_matchup(controller))

        try:
            key = read_key()
        except (KeyboardInterrupt, EOFError):
            key = "ctrl+c"

        intent = translate_key(key)
        if intent is None:
            logger.debug("Ignoring key %r", key)
            continue
        controller.handle(intent)

    return controller.decisions

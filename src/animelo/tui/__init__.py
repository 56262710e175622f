"""Terminal user interface."""

from animelo.tui.app import render_matchup, run_session
from animelo.tui.keys import translate_key

__all__ = ["render_matchup", "run_session", "translate_key"]

"""Interactive comparison session."""

from animelo.session.controller import SessionController, SessionState
from animelo.session.intents import Decide, Intent, MoveFocus, Quit

__all__ = [
    "Decide",
    "Intent",
    "MoveFocus",
    "Quit",
    "SessionController",
    "SessionState",
]

"""Translate key presses into session intents.

Vim-style letters and arrow keys both work: up/down (k/j) move the cursor,
left/right (h/l) pick the top/bottom anime directly, enter/space pick the
focused one.
"""

from animelo.models.elo import Side
from animelo.session.intents import Decide, Intent, MoveFocus, Quit

# Raw terminal input -> key name
RAW_KEYS = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\r": "enter",
    "\n": "enter",
    " ": "space",
    "\x03": "ctrl+c",
    "\x04": "ctrl+d",
    "": "ctrl+d",  # input closed
}

KEY_INTENTS: dict[str, Intent] = {
    "q": Quit(),
    "ctrl+c": Quit(),
    "ctrl+d": Quit(),
    "up": MoveFocus(Side.UP),
    "k": MoveFocus(Side.UP),
    "down": MoveFocus(Side.DOWN),
    "j": MoveFocus(Side.DOWN),
    "left": Decide(Side.UP),
    "h": Decide(Side.UP),
    "right": Decide(Side.DOWN),
    "l": Decide(Side.DOWN),
    "enter": Decide(),
    "space": Decide(),
}


def normalize_key(raw: str) -> str:
    """Map raw terminal input to a key name; printable keys map to themselves."""
    return RAW_KEYS.get(raw, raw)


def translate_key(key: str) -> Intent | None:
    """Translate a key (raw or already named) into an intent, or None to ignore it."""
    return KEY_INTENTS.get(normalize_key(key))

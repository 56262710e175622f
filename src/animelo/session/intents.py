"""User intents understood by the session controller."""

from dataclasses import dataclass

from animelo.models.elo import Side


@dataclass(frozen=True)
class MoveFocus:
    """Move the cursor to one side without deciding."""

    side: Side


@dataclass(frozen=True)
class Decide:
    """Pick a winner. ``side=None`` picks the focused side."""

    side: Side | None = None


@dataclass(frozen=True)
class Quit:
    """End the session."""


Intent = MoveFocus | Decide | Quit

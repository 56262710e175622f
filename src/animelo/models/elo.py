"""Elo-based pairwise comparison models."""

from enum import Enum

from pydantic import BaseModel

from animelo.models.anime import Anime


class Side(str, Enum):
    """Position of an anime in the displayed matchup."""

    UP = "up"
    DOWN = "down"

    @property
    def other(self) -> "Side":
        return Side.DOWN if self is Side.UP else Side.UP


class Matchup(BaseModel):
    """Two distinct anime presented for comparison."""

    up: Anime
    down: Anime

    def at(self, side: Side) -> Anime:
        """Return the anime shown on the given side."""
        return self.up if side is Side.UP else self.down


class EloUpdate(BaseModel):
    """Elo rating updates for both anime after a decision."""

    winner_id: int
    loser_id: int
    winner_elo_before: int
    winner_elo_after: int
    loser_elo_before: int
    loser_elo_after: int
    k_factor: int

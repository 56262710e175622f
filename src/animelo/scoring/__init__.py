"""Elo scoring and matchup selection."""

from animelo.scoring.elo import K_FACTOR, calculate_elo_update, create_elo_update
from animelo.scoring.selector import InsufficientCandidatesError, PairSelector

__all__ = [
    "K_FACTOR",
    "InsufficientCandidatesError",
    "PairSelector",
    "calculate_elo_update",
    "create_elo_update",
]

"""Pydantic models for animelo."""

from animelo.models.anime import Anime, AnimeCreate
from animelo.models.elo import EloUpdate, Matchup, Side

__all__ = [
    "Anime",
    "AnimeCreate",
    "EloUpdate",
    "Matchup",
    "Side",
]

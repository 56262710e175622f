"""Anime catalog models."""

from pydantic import BaseModel, Field

DEFAULT_ELO_RATING = 1500


class AnimeCreate(BaseModel):
    """Data required to add an anime to the rating store."""

    anidb_id: int = Field(description="MyAnimeList series id, stable across imports")
    title: str = Field(min_length=1, description="Series title")
    status: str = Field(description="List status, e.g. 'Completed' or 'Watching'")


class Anime(AnimeCreate):
    """Full anime model with rating fields."""

    elo: int = Field(default=DEFAULT_ELO_RATING, description="Elo rating from comparisons")
    fights: int = Field(default=0, ge=0, description="Number of comparisons judged")

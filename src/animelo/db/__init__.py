"""Database module for animelo."""

from animelo.db.connection import get_connection
from animelo.db.repository import AnimeRepository, OrderPolicy

__all__ = ["AnimeRepository", "OrderPolicy", "get_connection"]

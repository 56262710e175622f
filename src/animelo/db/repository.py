"""Repository for rating store operations."""

import logging
import sqlite3
from enum import Enum

from pydantic import ValidationError

from animelo.db.exceptions import DuplicateIdentityError, NotFoundError, StoreUnavailableError
from animelo.models.anime import DEFAULT_ELO_RATING, Anime, AnimeCreate

logger = logging.getLogger(__name__)


class OrderPolicy(str, Enum):
    """Ordering applied when sampling eligible anime."""

    LEAST_COMPARED = "least_compared"  # fights ascending, random tie-break
    RANDOM = "random"


_ORDER_BY = {
    OrderPolicy.LEAST_COMPARED: "fights ASC, RANDOM()",
    OrderPolicy.RANDOM: "RANDOM()",
}


class AnimeRepository:
    """Rating store for anime, keyed by MyAnimeList id.

    Every write is committed before the method returns. Rows are decoded
    into ``Anime`` models at this boundary; a row that does not validate
    means the store is corrupt and raises ``StoreUnavailableError``.
    """

    def __init__(self, conn: sqlite3.Connection, eligible_status: str = "Completed") -> None:
        self.conn = conn
        self.eligible_status = eligible_status

    def get(self, anidb_id: int) -> Anime:
        """Get a single anime by id.

        Raises:
            NotFoundError: If no anime has this id
        """
        try:
            row = self.conn.execute(
                "SELECT * FROM animes WHERE anidb_id = ?",
                (anidb_id,),
            ).fetchone()
        except sqlite3.DatabaseError as e:
            raise StoreUnavailableError(f"Cannot read anime {anidb_id}: {e}") from e
        if row is None:
            raise NotFoundError(anidb_id)
        return self._row_to_anime(row)

    def put(self, anime: AnimeCreate) -> Anime:
        """Create a new anime with the baseline rating and no comparisons.

        Raises:
            DuplicateIdentityError: If the id already exists; the stored row is left untouched
        """
        try:
            self.conn.execute(
                """
                INSERT INTO animes (anidb_id, title, status, elo, fights)
                VALUES (?, ?, ?, ?, 0)
                """,
                (anime.anidb_id, anime.title, anime.status, DEFAULT_ELO_RATING),
            )
            self.conn.commit()
        except sqlite3.IntegrityError as e:
            self.conn.rollback()
            raise DuplicateIdentityError(anime.anidb_id) from e
        except sqlite3.DatabaseError as e:
            raise StoreUnavailableError(f"Cannot insert anime {anime.anidb_id}: {e}") from e

        return Anime(
            anidb_id=anime.anidb_id,
            title=anime.title,
            status=anime.status,
            elo=DEFAULT_ELO_RATING,
            fights=0,
        )

    def update_rating(self, anidb_id: int, new_elo: int) -> None:
        """Set the rating and count one more comparison, in a single statement.

        Raises:
            NotFoundError: If no anime has this id
        """
        try:
            cursor = self.conn.execute(
                "UPDATE animes SET elo = ?, fights = fights + 1 WHERE anidb_id = ?",
                (new_elo, anidb_id),
            )
            self.conn.commit()
        except sqlite3.DatabaseError as e:
            raise StoreUnavailableError(f"Cannot update anime {anidb_id}: {e}") from e
        if cursor.rowcount == 0:
            raise NotFoundError(anidb_id)

    def sample_eligible(
        self, n: int, order: OrderPolicy = OrderPolicy.LEAST_COMPARED
    ) -> list[Anime]:
        """Get up to ``n`` eligible anime in the requested order."""
        if n <= 0:
            return []
        try:
            rows = self.conn.execute(
                f"""
                SELECT * FROM animes
                WHERE status = ?
                ORDER BY {_ORDER_BY[order]}
                LIMIT ?
                """,
                (self.eligible_status, n),
            ).fetchall()
        except sqlite3.DatabaseError as e:
            raise StoreUnavailableError(f"Cannot sample eligible anime: {e}") from e
        return [self._row_to_anime(row) for row in rows]

    def count(self, eligible_only: bool = False) -> int:
        """Count anime in the store."""
        try:
            if eligible_only:
                row = self.conn.execute(
                    "SELECT COUNT(*) FROM animes WHERE status = ?",
                    (self.eligible_status,),
                ).fetchone()
            else:
                row = self.conn.execute("SELECT COUNT(*) FROM animes").fetchone()
        except sqlite3.DatabaseError as e:
            raise StoreUnavailableError(f"Cannot count anime: {e}") from e
        total: int = row[0]
        return total

    def get_rankings(self, limit: int = 10) -> list[Anime]:
        """Get eligible anime ordered by rating, highest first."""
        try:
            rows = self.conn.execute(
                """
                SELECT * FROM animes
                WHERE status = ?
                ORDER BY elo DESC, fights DESC, title ASC
                LIMIT ?
                """,
                (self.eligible_status, limit),
            ).fetchall()
        except sqlite3.DatabaseError as e:
            raise StoreUnavailableError(f"Cannot read rankings: {e}") from e
        return [self._row_to_anime(row) for row in rows]

    def _row_to_anime(self, row: sqlite3.Row) -> Anime:
        """Convert a database row to an Anime model."""
        try:
            return Anime(
                anidb_id=row["anidb_id"],
                title=row["title"],
                status=row["status"],
                elo=row["elo"],
                fights=row["fights"],
            )
        except (IndexError, ValidationError) as e:
            raise StoreUnavailableError(f"Corrupt row in rating store: {e}") from e

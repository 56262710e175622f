"""Database migrations for animelo."""

import logging
import sqlite3

from animelo.config import get_settings
from animelo.db.connection import get_connection
from animelo.db.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

SCHEMA = """
-- Rating store, keyed by the MyAnimeList series id
CREATE TABLE IF NOT EXISTS animes (
  anidb_id INTEGER PRIMARY KEY,
  title TEXT NOT NULL,
  status TEXT NOT NULL,
  elo INTEGER NOT NULL DEFAULT 1500,
  fights INTEGER NOT NULL DEFAULT 0
);

CREATE INDEX IF NOT EXISTS idx_animes_selection ON animes(status, fights);
"""

# Column name -> declared type, in table order
EXPECTED_COLUMNS = {
    "anidb_id": "INTEGER",
    "title": "TEXT",
    "status": "TEXT",
    "elo": "INTEGER",
    "fights": "INTEGER",
}


def migrate(conn: sqlite3.Connection) -> None:
    """Create the rating store tables if they don't exist."""
    try:
        conn.executescript(SCHEMA)
        conn.commit()
    except sqlite3.DatabaseError as e:
        raise StoreUnavailableError(f"Cannot migrate rating store: {e}") from e
    verify_schema(conn)


def verify_schema(conn: sqlite3.Connection) -> None:
    """Check the animes table has exactly the columns the store reads.

    Raises:
        StoreUnavailableError: If the table is missing or its columns differ
    """
    try:
        rows = conn.execute("PRAGMA table_info(animes)").fetchall()
    except sqlite3.DatabaseError as e:
        raise StoreUnavailableError(f"Cannot read rating store schema: {e}") from e

    if not rows:
        raise StoreUnavailableError("Rating store has no 'animes' table")

    # PRAGMA table_info rows: (cid, name, type, notnull, dflt_value, pk)
    found = {row[1]: str(row[2]).upper() for row in rows}
    if found != EXPECTED_COLUMNS:
        raise StoreUnavailableError(
            f"Rating store schema mismatch: expected {EXPECTED_COLUMNS}, found {found}"
        )


if __name__ == "__main__":
    settings = get_settings()
    with get_connection(settings.db_path, create=True) as connection:
        migrate(connection)
    print(f"✓ Database migrations complete ({settings.db_path})")

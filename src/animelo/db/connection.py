"""Database connection management."""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from animelo.db.exceptions import StoreUnavailableError


@contextmanager
def get_connection(db_path: Path, *, create: bool = False) -> Iterator[sqlite3.Connection]:
    """Open the rating store with WAL mode enabled.

    Args:
        db_path: Path to the SQLite file
        create: Create the file (and parent directories) if it does not exist.
            When False a missing file is an error rather than a fresh empty store.

    Raises:
        StoreUnavailableError: If the file is missing or cannot be opened
    """
    if create:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    elif not db_path.is_file():
        msg = f"Rating store {db_path} does not exist; run 'animelo import mal' first"
        raise StoreUnavailableError(msg)

    try:
        conn = sqlite3.connect(db_path)
    except sqlite3.DatabaseError as e:
        raise StoreUnavailableError(f"Cannot open rating store {db_path}: {e}") from e
    try:
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA journal_mode=WAL")
        except sqlite3.DatabaseError as e:
            raise StoreUnavailableError(f"Cannot open rating store {db_path}: {e}") from e
        yield conn
    finally:
        conn.close()

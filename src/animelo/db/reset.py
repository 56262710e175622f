"""Reset database (development only)."""

from pathlib import Path

from animelo.config import get_settings
from animelo.db.connection import get_connection
from animelo.db.migrate import migrate


def reset(db_path: Path) -> None:
    """Delete and recreate the rating store."""
    if db_path.exists():
        db_path.unlink()
        print(f"✓ Deleted {db_path}")

    # Also delete WAL and SHM files if they exist
    for suffix in ("-wal", "-shm"):
        db_path.with_name(db_path.name + suffix).unlink(missing_ok=True)

    with get_connection(db_path, create=True) as conn:
        migrate(conn)
    print("✓ Database reset complete")


if __name__ == "__main__":
    reset(get_settings().db_path)

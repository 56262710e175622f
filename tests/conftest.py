"""pytest configuration and shared fixtures."""

import gzip
import sqlite3
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from animelo.db.migrate import migrate
from animelo.db.repository import AnimeRepository
from animelo.models.anime import Anime, AnimeCreate


@pytest.fixture
def conn() -> Iterator[sqlite3.Connection]:
    """Isolated in-memory rating store with the current schema."""
    test_conn = sqlite3.connect(":memory:")
    test_conn.row_factory = sqlite3.Row
    migrate(test_conn)
    yield test_conn
    test_conn.close()


@pytest.fixture
def repo(conn: sqlite3.Connection) -> AnimeRepository:
    """Repository over the in-memory store, eligible status 'Completed'."""
    return AnimeRepository(conn, eligible_status="Completed")


@pytest.fixture
def add_anime(repo: AnimeRepository) -> Callable[..., Anime]:
    """Insert an anime, optionally with a non-default rating and fight count."""

    def _add(
        anidb_id: int,
        title: str | None = None,
        status: str = "Completed",
        elo: int | None = None,
        fights: int = 0,
    ) -> Anime:
        repo.put(AnimeCreate(anidb_id=anidb_id, title=title or f"Anime {anidb_id}", status=status))
        if elo is not None or fights:
            repo.conn.execute(
                "UPDATE animes SET elo = COALESCE(?, elo), fights = ? WHERE anidb_id = ?",
                (elo, fights, anidb_id),
            )
            repo.conn.commit()
        return repo.get(anidb_id)

    return _add


def build_export(entries: list[tuple[str, str, str]]) -> bytes:
    """Build a MyAnimeList export document from (id, title, status) triples."""
    animes = "".join(
        f"""
  <anime>
    <series_animedb_id>{anidb_id}</series_animedb_id>
    <series_title><![CDATA[{title}]]></series_title>
    <series_type>TV</series_type>
    <my_status>{status}</my_status>
  </anime>"""
        for anidb_id, title, status in entries
    )
    return f"""<?xml version="1.0" encoding="UTF-8" ?>
<myanimelist>
  <myinfo>
    <user_name>tester</user_name>
  </myinfo>{animes}
</myanimelist>
""".encode()


@pytest.fixture
def mal_document() -> Callable[..., bytes]:
    """Builder for uncompressed export documents."""
    return build_export


@pytest.fixture
def export_file(tmp_path: Path) -> Callable[..., Path]:
    """Write a gzipped export into tmp_path and return its path."""

    def _write(entries: list[tuple[str, str, str]], name: str = "animelist.xml.gz") -> Path:
        path = tmp_path / name
        path.write_bytes(gzip.compress(build_export(entries)))
        return path

    return _write

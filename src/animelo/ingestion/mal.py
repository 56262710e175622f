"""MyAnimeList export import.

MyAnimeList exports are gzip-compressed XML documents::

    <myanimelist>
      <myinfo>...</myinfo>
      <anime>
        <series_animedb_id>5114</series_animedb_id>
        <series_title><![CDATA[Fullmetal Alchemist: Brotherhood]]></series_title>
        <my_status>Completed</my_status>
        ...
      </anime>
    </myanimelist>
"""

import gzip
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError, fromstring
from pydantic import ValidationError

from animelo.db.exceptions import DuplicateIdentityError
from animelo.db.repository import AnimeRepository
from animelo.models.anime import AnimeCreate

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"
ROOT_TAG = "myanimelist"


class ImportFormatError(Exception):
    """The export file is missing, not gzip/XML, or has malformed records."""


@dataclass
class ImportResult:
    """Result of importing one export file."""

    records_found: int
    inserted: int
    duplicates: int
    eligible: int


def _read_document(path: Path) -> bytes:
    """Read the export, decompressing it when it is gzipped."""
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ImportFormatError(f"Cannot read {path}: {e}") from e

    if not data.startswith(GZIP_MAGIC):
        return data

    logger.info("Decompressing %s", path)
    try:
        return gzip.decompress(data)
    except (OSError, EOFError) as e:
        raise ImportFormatError(f"Corrupt gzip data in {path}: {e}") from e


def _parse_record(element: Any, position: int) -> AnimeCreate:
    """Parse one <anime> element into an AnimeCreate."""
    raw_id = (element.findtext("series_animedb_id") or "").strip()
    title = (element.findtext("series_title") or "").strip()
    status = (element.findtext("my_status") or "").strip()

    try:
        anidb_id = int(raw_id)
    except ValueError as e:
        raise ImportFormatError(f"Record {position}: invalid series_animedb_id {raw_id!r}") from e

    try:
        return AnimeCreate(anidb_id=anidb_id, title=title, status=status)
    except ValidationError as e:
        raise ImportFormatError(f"Record {position} (id {anidb_id}): {e}") from e


def parse_export(path: Path) -> list[AnimeCreate]:
    """Decompress and parse a MyAnimeList export.

    Args:
        path: Path to the ``.xml.gz`` export (plain ``.xml`` is accepted too)

    Returns:
        One AnimeCreate per <anime> element, in document order

    Raises:
        ImportFormatError: If the file cannot be read or is not a valid export
    """
    document = _read_document(path)

    try:
        root = fromstring(document)
    except (ParseError, DefusedXmlException) as e:
        raise ImportFormatError(f"Failed to parse XML in {path}: {e}") from e

    if root.tag != ROOT_TAG:
        raise ImportFormatError(f"Expected <{ROOT_TAG}> root element, found <{root.tag}>")

    return [
        _parse_record(element, position)
        for position, element in enumerate(root.iter("anime"), 1)
    ]


def import_catalog(repo: AnimeRepository, records: list[AnimeCreate]) -> ImportResult:
    """Add parsed records to the rating store.

    Records whose id is already stored are skipped; their existing rating
    and fight count are left as they are.
    """
    logger.info("Inserting %d titles into the database", len(records))

    inserted = 0
    duplicates = 0
    eligible = 0

    for record in records:
        try:
            repo.put(record)
        except DuplicateIdentityError:
            logger.warning("Skipping %d (%s): already imported", record.anidb_id, record.title)
            duplicates += 1
            continue

        inserted += 1
        if record.status == repo.eligible_status:
            eligible += 1

    logger.info(
        "Imported %d titles (%d eligible), skipped %d duplicates",
        inserted,
        eligible,
        duplicates,
    )

    return ImportResult(
        records_found=len(records),
        inserted=inserted,
        duplicates=duplicates,
        eligible=eligible,
    )

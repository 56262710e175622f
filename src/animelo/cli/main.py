"""Main Typer application for animelo."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from animelo.cli.errorhandler import handle_cli_errors
from animelo.config import get_settings
from animelo.db.connection import get_connection
from animelo.db.migrate import migrate, verify_schema
from animelo.db.repository import AnimeRepository
from animelo.ingestion.mal import import_catalog, parse_export
from animelo.scoring.selector import PairSelector
from animelo.session.controller import SessionController
from animelo.tui.app import run_session

app = typer.Typer(
    name="animelo",
    help="Rank your anime list with Elo ratings, two titles at a time",
    add_completion=False,
    no_args_is_help=True,
)

import_app = typer.Typer(
    name="import",
    help="Import a catalog into the rating store",
    no_args_is_help=True,
)
app.add_typer(import_app)

console = Console()
logger = logging.getLogger(__name__)

DbOption = Annotated[
    Path | None,
    typer.Option("--db", help="Rating store path (default: ANIMELO_DB_PATH or ~/.config/animelo)"),
]


@dataclass
class CliState:
    """Options shared by all commands."""

    debug: bool = False


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                show_path=False,
                log_time_format="[%Y-%m-%d %H:%M:%S]",
            )
        ],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Override ANIMELO_LOG_LEVEL")
    ] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Show tracebacks on errors")] = False,
) -> None:
    """Set up logging and shared options."""
    _configure_logging(log_level or get_settings().log_level)
    ctx.obj = CliState(debug=debug)


@import_app.callback()
def import_main() -> None:
    """Import a catalog into the rating store."""


@import_app.command("mal")
def import_mal(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="MyAnimeList export (.xml.gz)")],
    db: DbOption = None,
) -> None:
    """Import a MyAnimeList export. Titles already in the store are skipped."""
    settings = get_settings()
    db_path = db or settings.db_path

    with handle_cli_errors(debug=ctx.obj.debug):
        records = parse_export(file)
        with get_connection(db_path, create=True) as conn:
            migrate(conn)
            repo = AnimeRepository(conn, settings.eligible_status)
            result = import_catalog(repo, records)

    console.print(
        f"[green]✓[/green] Imported {result.inserted} of {result.records_found} titles "
        f"({result.eligible} '{settings.eligible_status}', "
        f"{result.duplicates} already present) into {db_path}"
    )


@app.command()
def rate(ctx: typer.Context, db: DbOption = None) -> None:
    """Compare titles two at a time; every decision is saved immediately."""
    settings = get_settings()
    db_path = db or settings.db_path

    with handle_cli_errors(debug=ctx.obj.debug), get_connection(db_path) as conn:
        verify_schema(conn)
        repo = AnimeRepository(conn, settings.eligible_status)
        controller = SessionController(repo, PairSelector(repo))
        decisions = run_session(controller, console, typer.getchar)

    console.print(f"Saved {decisions} decisions to {db_path}")


@app.command()
def top(
    ctx: typer.Context,
    n: Annotated[int, typer.Argument(min=1, help="Number of titles to show")] = 10,
    db: DbOption = None,
) -> None:
    """Show the highest rated titles."""
    settings = get_settings()
    db_path = db or settings.db_path

    with handle_cli_errors(debug=ctx.obj.debug), get_connection(db_path) as conn:
        verify_schema(conn)
        repo = AnimeRepository(conn, settings.eligible_status)
        rankings = repo.get_rankings(n)

    if not rankings:
        console.print(f"No '{settings.eligible_status}' titles in {db_path}")
        return

    table = Table(title=f"Top {len(rankings)}")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Elo", justify="right")
    table.add_column("Fights", justify="right")
    for rank, anime in enumerate(rankings, 1):
        table.add_row(str(rank), anime.title, str(anime.elo), str(anime.fights))
    console.print(table)

"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.console import Console

from animelo.db.exceptions import NotFoundError, StoreError, StoreUnavailableError
from animelo.ingestion.mal import ImportFormatError
from animelo.scoring.selector import InsufficientCandidatesError

console = Console(stderr=True)


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Context manager to turn fatal errors into a message and exit code 1.

    Args:
        debug: If True, re-raise for a full traceback instead.
    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit):
        raise
    except InsufficientCandidatesError as e:
        if debug:
            raise
        console.print(f"[bold red]Nothing to compare:[/bold red] {e}")
        console.print("Import a list with 'animelo import mal <file.xml.gz>' first.")
        raise typer.Exit(1) from e
    except StoreUnavailableError as e:
        if debug:
            raise
        console.print(f"[bold red]Rating store unavailable:[/bold red] {e}")
        raise typer.Exit(1) from e
    except NotFoundError as e:
        if debug:
            raise
        console.print(f"[bold red]Rating store inconsistent:[/bold red] {e}")
        raise typer.Exit(1) from e
    except StoreError as e:
        if debug:
            raise
        console.print(f"[bold red]Rating store error:[/bold red] {e}")
        raise typer.Exit(1) from e
    except ImportFormatError as e:
        if debug:
            raise
        console.print(f"[bold red]Import failed:[/bold red] {e}")
        raise typer.Exit(1) from e

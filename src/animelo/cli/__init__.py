"""Command line interface for animelo."""

from animelo.cli.main import app

__all__ = ["app"]

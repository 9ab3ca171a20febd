"""Root CLI entry point for FileLens."""
from __future__ import annotations

import typer

from . import diff as diff_cli
from . import fingerprint as fingerprint_cli
from . import ls as ls_cli
from . import neighbors as neighbors_cli

app = typer.Typer(add_completion=False, help="FileLens command line interface")
app.add_typer(fingerprint_cli.app, name="fingerprint", help="Compute MinHash signatures for a corpus")
app.add_typer(neighbors_cli.app, name="neighbors", help="Rank the files most similar to a query file")
app.add_typer(diff_cli.app, name="diff", help="Show an aligned side-by-side diff of two files")
app.add_typer(ls_cli.app, name="ls", help="List cached neighbor tables")


def run() -> None:
    """Execute the root CLI."""

    app()


__all__ = ["app", "run"]

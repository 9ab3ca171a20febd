"""CLI for listing cached neighbor tables."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from filelens.cli.common import init_settings
from filelens.config import resolve_store_root
from filelens.storage.store import NeighborStore

app = typer.Typer(help="List neighbor tables held in the store", add_completion=False, invoke_without_command=True)


@app.callback()
def ls(  # type: ignore[override]
    store: Optional[Path] = typer.Option(
        None, "--store", path_type=Path, help="Neighbor store directory (defaults to the configured store root)"
    ),
    mode: Optional[str] = typer.Option(None, help="Filter by retrieval mode"),
    query: Optional[str] = typer.Option(None, help="Filter by query path"),
    corpus_sha: Optional[str] = typer.Option(None, "--corpus-sha", help="Filter by corpus digest"),
    limit: Optional[int] = typer.Option(50, help="Maximum rows to display"),
    config: Optional[Path] = typer.Option(None, "--config", path_type=Path, help="Settings YAML"),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON instead of a table"),
) -> None:
    """List stored neighbor tables applying optional filters."""

    settings = init_settings(config)
    store_root = store or Path(resolve_store_root(settings))

    try:
        rows = NeighborStore(store_root).query(
            limit=limit,
            mode=mode,
            query_path=query,
            corpus_sha=corpus_sha,
        )
    except ValueError as exc:
        typer.secho(f"[ERROR] {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if json_output:
        typer.echo(json.dumps(rows, ensure_ascii=False, indent=2))
        return

    if not rows:
        typer.echo("No neighbor tables matched the provided filters.")
        return

    header = ["table_id", "mode", "k", "num_hashes", "count", "corpus", "query_path", "created_at"]
    lines = [" | ".join(header)]
    lines.append("-" * len(lines[0]))
    for row in rows:
        lines.append(
            " | ".join(
                [
                    str(row.get("table_id", "")),
                    str(row.get("mode", "")),
                    str(row.get("k", "")),
                    str(row.get("num_hashes") or "-"),
                    str(row.get("count", "")),
                    str(row.get("corpus_sha", ""))[:8],
                    str(row.get("query_path", "")),
                    str(row.get("created_at", "")),
                ]
            )
        )
    typer.echo("\n".join(lines))


__all__ = ["app"]

"""CLI for retrieving the nearest neighbors of one corpus file."""
from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer

from filelens.cli.common import init_settings, load_corpus_or_exit
from filelens.config import resolve_store_root
from filelens.errors import InvalidArgumentError
from filelens.neighbors.models import APPROXIMATE, NeighborResult
from filelens.neighbors.retriever import find_neighbors
from filelens.storage.store import NeighborStore
from filelens.utils.validate import SchemaValidationError

app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    help="Rank the files most similar to a query file.",
)


def format_score(result: NeighborResult, mode: str) -> str:
    """Render ``result.score`` the way its retrieval mode reads best."""

    if mode == APPROXIMATE:
        return f"~{round(float(result.score) * 100)}% similar"
    return f"distance={int(result.score)}"


@app.callback()
def neighbors(
    corpus: Path = typer.Option(..., "--corpus", exists=True, readable=True, path_type=Path, help="Corpus JSON"),
    query: str = typer.Option(..., "--query", help="Path of the query file inside the corpus"),
    mode: str = typer.Option(APPROXIMATE, "--mode", help="approximate (MinHash) or exact (edit distance)"),
    k: Optional[int] = typer.Option(None, "-k", "--k", min=0, help="Number of neighbors to return"),
    store: Optional[Path] = typer.Option(
        None,
        "--store",
        path_type=Path,
        help="Neighbor store directory used as a cache (implies --cache)",
    ),
    use_cache: bool = typer.Option(
        False,
        "--cache",
        help="Cache tables in the configured store root, the one `filelens ls` lists by default",
    ),
    workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Processes for exact mode"),
    config: Optional[Path] = typer.Option(None, "--config", path_type=Path, help="Settings YAML"),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON instead of a list"),
) -> None:
    """Print the ranked neighbors of ``query``."""

    settings = init_settings(config, workers=workers)
    data = load_corpus_or_exit(corpus)
    cache: Optional[NeighborStore] = None
    if store is not None or use_cache:
        cache = NeighborStore(store or resolve_store_root(settings))

    try:
        results: List[NeighborResult] = find_neighbors(
            data,
            query,
            mode=mode,
            k=k,
            cache=cache,
            settings=settings,
        )
    except InvalidArgumentError as exc:
        typer.secho(f"[ERROR] {exc.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    except SchemaValidationError as exc:
        typer.secho("[ERROR] Cached neighbor table failed schema validation:", fg=typer.colors.RED, err=True)
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=1) from exc
    except (ValueError, RuntimeError, OSError) as exc:
        typer.secho(f"[ERROR] Failed to read neighbor store: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if json_output:
        payload = {"query_path": query, "mode": mode, "results": [result.to_dict() for result in results]}
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    if not results:
        typer.echo(f"No neighbors found for {query}.")
        return

    typer.echo(f"Neighbors of {query} ({mode}):")
    for rank, result in enumerate(results, start=1):
        typer.echo(f"  {rank:>3}. {result.path} ({format_score(result, mode)})")


__all__ = ["app", "format_score", "neighbors"]

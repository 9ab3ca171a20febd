"""CLI for fingerprinting every file in a corpus."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from filelens.cli.common import init_settings, load_corpus_or_exit
from filelens.fingerprint.builder import fingerprint_corpus
from filelens.storage.corpus import corpus_digest
from filelens.utils.io import write_json

app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    help="Compute MinHash signatures for a corpus.",
)


@app.callback()
def fingerprint(
    corpus: Path = typer.Option(..., "--corpus", exists=True, readable=True, path_type=Path, help="Corpus JSON"),
    out: Path = typer.Option(..., "--out", path_type=Path, help="Destination signatures JSON"),
    num_hashes: Optional[int] = typer.Option(None, "--num-hashes", min=1, help="Signature length"),
    config: Optional[Path] = typer.Option(None, "--config", path_type=Path, help="Settings YAML"),
) -> None:
    """Fingerprint ``corpus`` and persist the signatures to ``out``."""

    settings = init_settings(config, num_hashes=num_hashes)
    data = load_corpus_or_exit(corpus)

    signatures = fingerprint_corpus(data, settings.num_hashes)
    payload = {
        "corpus_sha": corpus_digest(data),
        "num_hashes": settings.num_hashes,
        "signatures": signatures,
    }

    try:
        write_json(out, payload)
    except Exception as exc:
        typer.secho(f"[ERROR] Failed to write signatures: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    typer.secho(
        f"Signatures written to {out} (files={len(signatures)}, sha={payload['corpus_sha'][:8]})",
        fg=typer.colors.GREEN,
    )


__all__ = ["app", "fingerprint"]

"""Shared option handling for the FileLens CLI commands."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer

from filelens.config import Settings, load_settings
from filelens.errors import ConfigError
from filelens.storage.corpus import Corpus, load_corpus
from filelens.utils.logging import configure_logging
from filelens.utils.validate import SchemaValidationError

__all__ = ["init_settings", "load_corpus_or_exit"]


def init_settings(config: Optional[Path], **overrides: Any) -> Settings:
    """Load settings and configure logging, exiting on invalid configuration."""

    try:
        settings = load_settings(config, **overrides)
    except ConfigError as exc:
        typer.secho(f"[ERROR] {exc.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    configure_logging(settings.log_level, json_format=settings.log_format == "json")
    return settings


def load_corpus_or_exit(path: Path) -> Corpus:
    try:
        return load_corpus(path)
    except SchemaValidationError as exc:
        typer.secho(f"[ERROR] Corpus '{path}' failed schema validation:", fg=typer.colors.RED, err=True)
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=1) from exc
    except Exception as exc:
        typer.secho(f"[ERROR] Failed to load corpus '{path}': {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

"""Corpus loading helpers.

A corpus is a JSON object mapping file paths to file contents. Loading returns
a read-only snapshot so retrieval and alignment never observe a change
mid-call.
"""
from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import structlog

from filelens.utils.io import read_json, sha256_json
from filelens.utils.validate import validate_corpus_schema

__all__ = ["Corpus", "corpus_digest", "load_corpus", "snapshot"]

log = structlog.get_logger(__name__)

Corpus = Mapping[str, str]


def snapshot(data: Any) -> Corpus:
    """Validate ``data`` and freeze it into an immutable corpus."""

    if isinstance(data, Mapping):
        data = dict(data)
    validate_corpus_schema(data)
    return MappingProxyType(data)


def load_corpus(path: str | Path) -> Corpus:
    """Read and validate the corpus JSON stored at ``path``."""

    corpus = snapshot(read_json(path))
    log.debug("corpus_loaded", path=str(path), files=len(corpus))
    return corpus


def corpus_digest(corpus: Corpus) -> str:
    """Return a stable SHA-256 digest of ``corpus`` for cache keys."""

    return sha256_json(dict(corpus))

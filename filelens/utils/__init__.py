"""Utility helpers for FileLens."""

from .io import ensure_dir, ensure_parent_dir, read_json, sha256_json, write_json
from .logging import configure_logging
from .validate import SchemaValidationError, validate_corpus_schema, validate_neighbors_schema

__all__ = [
    "configure_logging",
    "ensure_dir",
    "ensure_parent_dir",
    "read_json",
    "write_json",
    "sha256_json",
    "SchemaValidationError",
    "validate_corpus_schema",
    "validate_neighbors_schema",
]

"""Schema validation helpers."""
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from jsonschema import Draft7Validator

__all__ = ["SchemaValidationError", "validate_corpus_schema", "validate_neighbors_schema"]

SCHEMA_DIR = Path(__file__).resolve().parents[1] / "schema"


class SchemaValidationError(RuntimeError):
    """Raised when a payload fails JSON Schema validation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@lru_cache(maxsize=None)
def _load_schema(name: str) -> Dict[str, Any]:
    with (SCHEMA_DIR / name).open("r", encoding="utf-8") as handle:
        return json.load(handle)


@lru_cache(maxsize=None)
def _build_validator(name: str) -> Draft7Validator:
    return Draft7Validator(_load_schema(name))


def _validate(name: str, payload: Any) -> None:
    validator = _build_validator(name)
    errors = sorted(validator.iter_errors(payload), key=lambda err: [str(part) for part in err.path])
    if errors:
        formatted = "\n".join(
            f"{'/'.join(str(x) for x in error.path)}: {error.message}".strip() or error.message
            for error in errors
        )
        raise SchemaValidationError(formatted)


def validate_corpus_schema(corpus: Any) -> None:
    """Validate a decoded corpus object or raise :class:`SchemaValidationError`."""

    _validate("corpus.schema.json", corpus)


def validate_neighbors_schema(table: Any) -> None:
    """Validate a decoded neighbor table or raise :class:`SchemaValidationError`."""

    _validate("neighbors.schema.json", table)

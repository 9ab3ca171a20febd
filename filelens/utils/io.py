"""JSON files on disk: corpus snapshots, signature dumps and neighbor tables.

Writes are deterministic (sorted keys, two-space indent) so the same table
always produces the same bytes, and :func:`sha256_json` gives the digest that
keys a corpus snapshot in the neighbor store.
"""
from __future__ import annotations

import json
from hashlib import sha256
from pathlib import Path
from typing import Any

__all__ = ["read_json", "write_json", "sha256_json", "ensure_dir", "ensure_parent_dir"]


def read_json(path: str | Path) -> Any:
    """Decode the JSON document at ``path``.

    A missing file propagates ``FileNotFoundError``; other OS failures become
    ``RuntimeError`` and undecodable content becomes ``ValueError``, both naming
    the offending path.
    """

    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except OSError as exc:
        raise RuntimeError(f"Cannot read '{file_path}': {exc}") from exc

    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ValueError(f"'{file_path}' is not valid JSON: {exc}") from exc


def ensure_dir(path: str | Path) -> Path:
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def ensure_parent_dir(path: str | Path) -> Path:
    """Create the directory that will hold ``path`` and return ``path``."""

    file_path = Path(path)
    ensure_dir(file_path.parent)
    return file_path


def write_json(path: str | Path, obj: Any) -> None:
    file_path = ensure_parent_dir(path)
    file_path.write_text(json.dumps(obj, ensure_ascii=False, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def sha256_json(obj: Any) -> str:
    """Digest of ``obj`` in compact sorted-key form; key order never changes it."""

    canonical = json.dumps(obj, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
    return sha256(canonical.encode("utf-8")).hexdigest()

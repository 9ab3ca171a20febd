"""Index of every neighbor table written to a store root.

``NeighborStore.put`` appends one JSON line per table to ``_manifest.jsonl``;
rewriting a cache key appends again rather than editing in place, so readers
keep the last row seen for each ``table_id``.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterator

from filelens.utils.io import ensure_dir

__all__ = ["MANIFEST_NAME", "append_manifest_line", "iter_manifest"]

MANIFEST_NAME = "_manifest.jsonl"


def append_manifest_line(root: str | Path, row: Dict[str, object]) -> Path:
    """Record ``row`` for a freshly stored table and return the manifest path."""

    manifest_path = ensure_dir(root) / MANIFEST_NAME
    line = json.dumps(row, ensure_ascii=False, separators=(",", ":"))
    with manifest_path.open("a", encoding="utf-8") as handle:
        handle.write(line + "\n")
    return manifest_path


def iter_manifest(root: str | Path) -> Iterator[Dict[str, object]]:
    """Yield table rows in write order.

    A store root without a manifest yields nothing. A line that does not decode
    raises ``ValueError`` with its line number.
    """

    manifest_path = Path(root) / MANIFEST_NAME
    if not manifest_path.exists():
        return

    with manifest_path.open("r", encoding="utf-8") as handle:
        for number, raw in enumerate(handle, start=1):
            if not raw.strip():
                continue
            try:
                yield json.loads(raw)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Corrupt manifest line {number} in '{manifest_path}': {exc}") from exc

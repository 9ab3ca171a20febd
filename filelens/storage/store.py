"""Neighbor-table caches: in-memory and append-only on disk."""
from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from filelens.neighbors.models import CacheKey, NeighborResult
from filelens.storage.manifest import append_manifest_line, iter_manifest
from filelens.utils.io import ensure_dir, read_json, sha256_json, write_json
from filelens.utils.validate import validate_neighbors_schema

__all__ = ["MemoryNeighborCache", "NeighborStore", "table_id"]

log = structlog.get_logger(__name__)


def table_id(key: CacheKey) -> str:
    """Return the stable identifier of the table stored under ``key``."""

    return sha256_json(
        {
            "corpus_sha": key.corpus_sha,
            "query_path": key.query_path,
            "mode": key.mode,
            "k": key.k,
            "num_hashes": key.num_hashes,
        }
    )[:16]


class MemoryNeighborCache:
    """Process-local cache keyed by :class:`CacheKey`."""

    def __init__(self) -> None:
        self._tables: Dict[CacheKey, List[NeighborResult]] = {}

    def get(self, key: CacheKey) -> Optional[List[NeighborResult]]:
        results = self._tables.get(key)
        return list(results) if results is not None else None

    def put(self, key: CacheKey, results: List[NeighborResult]) -> None:
        self._tables[key] = list(results)

    def __len__(self) -> int:
        return len(self._tables)


class NeighborStore:
    """Persist neighbor tables as JSON files indexed by an append-only manifest.

    Tables live under ``<root>/<mode>/<corpus_sha[:12]>/<table_id>.json``. Every
    ``put`` appends a manifest row; when a key is written twice the latest row
    wins in :meth:`query`.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def get(self, key: CacheKey) -> Optional[List[NeighborResult]]:
        path = self._table_path(key)
        if not path.exists():
            return None
        table = read_json(path)
        validate_neighbors_schema(table)
        return [NeighborResult.from_dict(row) for row in table["results"]]

    def put(self, key: CacheKey, results: List[NeighborResult]) -> None:
        root_path = ensure_dir(self.root)
        created_at = dt.datetime.now(dt.timezone.utc).isoformat().replace("+00:00", "Z")
        table = {
            "query_path": key.query_path,
            "mode": key.mode,
            "k": key.k,
            "num_hashes": key.num_hashes,
            "corpus_sha": key.corpus_sha,
            "created_at": created_at,
            "results": [result.to_dict() for result in results],
        }
        validate_neighbors_schema(table)

        path = self._table_path(key)
        write_json(path, table)

        append_manifest_line(
            root_path,
            {
                "table_id": table_id(key),
                "query_path": key.query_path,
                "mode": key.mode,
                "k": key.k,
                "num_hashes": key.num_hashes,
                "corpus_sha": key.corpus_sha,
                "count": len(results),
                "created_at": created_at,
                "path_table_json": _relative_path(path, root_path),
            },
        )
        log.debug("neighbor_table_stored", query=key.query_path, mode=key.mode, count=len(results))

    def query(self, limit: Optional[int] = None, **filters: Any) -> List[Dict[str, Any]]:
        """Return manifest rows matching ``filters``.

        Recognised filters: mode, query_path, corpus_sha, k. ``None`` values are
        ignored.
        """

        latest: Dict[str, Dict[str, Any]] = {}
        for row in iter_manifest(self.root):
            latest.pop(str(row.get("table_id")), None)
            latest[str(row.get("table_id"))] = dict(row)

        def _matches(row: Dict[str, Any]) -> bool:
            for key, value in filters.items():
                if value is None:
                    continue
                if key not in row:
                    return False
                if key == "k":
                    if int(row[key]) != int(value):
                        return False
                elif str(row[key]) != str(value):
                    return False
            return True

        matched = [row for row in latest.values() if _matches(row)]
        if limit is not None:
            matched = matched[: int(limit)]
        return matched

    def _table_path(self, key: CacheKey) -> Path:
        return self.root / key.mode / key.corpus_sha[:12] / f"{table_id(key)}.json"


def _relative_path(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)

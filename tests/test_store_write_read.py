from __future__ import annotations

import json
from pathlib import Path

import pytest

from filelens.neighbors import CacheKey, NeighborResult
from filelens.storage import NeighborStore, table_id
from filelens.storage.manifest import MANIFEST_NAME, iter_manifest
from filelens.utils.validate import SchemaValidationError


def _key(query: str = "src/a.py", mode: str = "exact", k: int = 5, sha: str = "f" * 64) -> CacheKey:
    return CacheKey(corpus_sha=sha, query_path=query, mode=mode, k=k)


def test_put_then_get_roundtrip(tmp_path: Path) -> None:
    store = NeighborStore(tmp_path)
    results = [NeighborResult("src/b.py", 2), NeighborResult("src/c.py", 7)]

    store.put(_key(), results)

    assert store.get(_key()) == results
    assert store.get(_key(k=3)) is None

    table_path = tmp_path / "exact" / ("f" * 12) / f"{table_id(_key())}.json"
    stored = json.loads(table_path.read_text(encoding="utf-8"))
    assert stored["results"] == [{"path": "src/b.py", "score": 2}, {"path": "src/c.py", "score": 7}]

    rows = list(iter_manifest(tmp_path))
    assert len(rows) == 1
    assert rows[0]["count"] == 2
    assert rows[0]["path_table_json"] == f"exact/{'f' * 12}/{table_id(_key())}.json"


def test_tampered_table_fails_validation(tmp_path: Path) -> None:
    store = NeighborStore(tmp_path)
    store.put(_key(mode="approximate"), [NeighborResult("src/b.py", 0.5)])

    table_path = tmp_path / "approximate" / ("f" * 12) / f"{table_id(_key(mode='approximate'))}.json"
    table = json.loads(table_path.read_text(encoding="utf-8"))
    table["results"][0]["score"] = "high"
    table_path.write_text(json.dumps(table), encoding="utf-8")

    with pytest.raises(SchemaValidationError):
        store.get(_key(mode="approximate"))


def test_corrupt_manifest_line_raises(tmp_path: Path) -> None:
    (tmp_path / MANIFEST_NAME).write_text('{"table_id": "a"}\nnot json\n', encoding="utf-8")

    with pytest.raises(ValueError):
        list(iter_manifest(tmp_path))


def test_signature_length_separates_tables(tmp_path: Path) -> None:
    store = NeighborStore(tmp_path)
    long_key = CacheKey("f" * 64, "src/a.py", "approximate", 5, num_hashes=10)
    short_key = CacheKey("f" * 64, "src/a.py", "approximate", 5, num_hashes=1)

    store.put(long_key, [NeighborResult("src/b.py", 0.3)])

    assert table_id(long_key) != table_id(short_key)
    assert store.get(short_key) is None
    assert store.get(long_key) == [NeighborResult("src/b.py", 0.3)]

    rows = list(iter_manifest(tmp_path))
    assert rows[0]["num_hashes"] == 10
    stored = json.loads((tmp_path / rows[0]["path_table_json"]).read_text(encoding="utf-8"))
    assert stored["num_hashes"] == 10

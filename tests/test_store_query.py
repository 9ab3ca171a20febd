from __future__ import annotations

from pathlib import Path

from filelens.neighbors import CacheKey, NeighborResult
from filelens.storage import NeighborStore


def test_query_filters_and_latest_wins(tmp_path: Path) -> None:
    store = NeighborStore(tmp_path)
    sha_a, sha_b = "a" * 64, "b" * 64

    store.put(CacheKey(sha_a, "src/one.py", "approximate", 50), [NeighborResult("src/two.py", 0.8)])
    store.put(CacheKey(sha_a, "src/one.py", "exact", 5), [NeighborResult("src/two.py", 4)])
    store.put(CacheKey(sha_b, "src/two.py", "exact", 5), [])
    store.put(
        CacheKey(sha_a, "src/one.py", "exact", 5),
        [NeighborResult("src/two.py", 4), NeighborResult("src/three.py", 9)],
    )

    rows = store.query()
    assert len(rows) == 3

    exact_rows = store.query(mode="exact")
    assert {row["query_path"] for row in exact_rows} == {"src/one.py", "src/two.py"}
    rewritten = [row for row in exact_rows if row["query_path"] == "src/one.py"][0]
    assert rewritten["count"] == 2

    assert len(store.query(corpus_sha=sha_b)) == 1
    assert len(store.query(query_path="src/one.py", k=50)) == 1
    assert len(store.query(limit=1)) == 1
    assert NeighborStore(tmp_path / "missing").query() == []

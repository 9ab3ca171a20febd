from __future__ import annotations

from pathlib import Path

import pytest

from filelens.config import Settings
from filelens.errors import InvalidArgumentError
from filelens.neighbors import APPROXIMATE, EXACT, find_neighbors, retriever
from filelens.storage import MemoryNeighborCache, NeighborStore

from tests.helpers import build_sample_corpus


def _fail(*args, **kwargs):
    raise AssertionError("cached table should have been served")


def test_memory_cache_serves_second_lookup(monkeypatch: pytest.MonkeyPatch) -> None:
    corpus = build_sample_corpus()
    cache = MemoryNeighborCache()

    first = find_neighbors(corpus, "src/main.py", mode=APPROXIMATE, cache=cache)
    assert len(cache) == 1

    monkeypatch.setattr(retriever, "find_neighbors_approximate", _fail)
    second = find_neighbors(corpus, "src/main.py", mode=APPROXIMATE, cache=cache)

    assert second == first


def test_changed_corpus_misses_cache() -> None:
    corpus = build_sample_corpus()
    cache = MemoryNeighborCache()

    find_neighbors(corpus, "src/main.py", mode=EXACT, cache=cache)
    changed = dict(corpus, **{"src/main_copy.py": corpus["src/main.py"] + "# trailing\n"})
    results = find_neighbors(changed, "src/main.py", mode=EXACT, cache=cache)

    assert len(cache) == 2
    assert results[0].path == "src/main_verbose.py"


def test_on_disk_store_roundtrip(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    corpus = build_sample_corpus()
    store = NeighborStore(tmp_path / "store")

    first = find_neighbors(corpus, "src/main.py", mode=EXACT, cache=store)

    monkeypatch.setattr(retriever, "find_neighbors_exact", _fail)
    second = find_neighbors(corpus, "src/main.py", mode=EXACT, cache=NeighborStore(tmp_path / "store"))

    assert second == first
    assert [result.score for result in second] == [0, 6]


def test_mode_defaults_follow_settings() -> None:
    corpus = {f"f{i}.txt": f"line {i}\nshared\n" for i in range(8)}

    assert len(find_neighbors(corpus, "f0.txt", mode=APPROXIMATE)) == 7
    assert len(find_neighbors(corpus, "f0.txt", mode=EXACT)) == 5
    assert len(find_neighbors(corpus, "f0.txt", mode=EXACT, settings=Settings(exact_k=2))) == 2


def test_unknown_mode_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        find_neighbors(build_sample_corpus(), "src/main.py", mode="semantic")


def test_signature_length_is_part_of_cache_key() -> None:
    corpus = build_sample_corpus()
    cache = MemoryNeighborCache()

    find_neighbors(corpus, "src/main.py", mode=APPROXIMATE, cache=cache, settings=Settings(num_hashes=10))
    short = find_neighbors(corpus, "src/main.py", mode=APPROXIMATE, cache=cache, settings=Settings(num_hashes=1))

    assert len(cache) == 2
    assert short == retriever.find_neighbors_approximate(corpus, "src/main.py", 50, num_hashes=1)


def test_exact_tables_ignore_signature_length(monkeypatch: pytest.MonkeyPatch) -> None:
    corpus = build_sample_corpus()
    cache = MemoryNeighborCache()

    first = find_neighbors(corpus, "src/main.py", mode=EXACT, cache=cache, settings=Settings(num_hashes=10))
    monkeypatch.setattr(retriever, "find_neighbors_exact", _fail)
    second = find_neighbors(corpus, "src/main.py", mode=EXACT, cache=cache, settings=Settings(num_hashes=1))

    assert second == first
    assert len(cache) == 1

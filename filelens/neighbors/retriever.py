"""Top-K neighbor retrieval over a corpus snapshot."""
from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from itertools import repeat
from typing import Dict, List, Mapping, Optional, Sequence

import structlog

from filelens.config import Settings
from filelens.distance.levenshtein import edit_distance, exceeds_bound
from filelens.errors import InvalidArgumentError
from filelens.fingerprint.builder import DEFAULT_NUM_HASHES, Signature, fingerprint
from filelens.fingerprint.similarity import similarity
from filelens.neighbors.models import (
    APPROXIMATE,
    EXACT,
    RETRIEVAL_MODES,
    CacheKey,
    NeighborCache,
    NeighborResult,
)
from filelens.storage.corpus import corpus_digest

__all__ = [
    "DEFAULT_APPROXIMATE_K",
    "DEFAULT_EXACT_K",
    "build_file_index",
    "find_neighbors",
    "find_neighbors_approximate",
    "find_neighbors_exact",
]

log = structlog.get_logger(__name__)

DEFAULT_APPROXIMATE_K = 50
DEFAULT_EXACT_K = 5

FileIndex = Dict[str, int]


def build_file_index(corpus: Mapping[str, str]) -> FileIndex:
    """Return the content length of every file in ``corpus``."""

    return {path: len(content) for path, content in corpus.items()}


def find_neighbors_approximate(
    corpus: Mapping[str, str],
    query_path: str,
    k: int = DEFAULT_APPROXIMATE_K,
    *,
    num_hashes: int = DEFAULT_NUM_HASHES,
    signatures: Optional[Mapping[str, Signature]] = None,
) -> List[NeighborResult]:
    """Rank every other file by MinHash similarity to ``query_path``.

    ``signatures`` may carry precomputed fingerprints; any path missing from it
    is fingerprinted on the fly. Ties keep corpus iteration order.
    """

    _require_query(corpus, query_path)
    _require_k(k)

    def _signature(path: str) -> Signature:
        if signatures is not None and path in signatures:
            return list(signatures[path])
        return fingerprint(corpus[path], num_hashes)

    query_signature = _signature(query_path)
    scored = [
        NeighborResult(path=path, score=similarity(query_signature, _signature(path)))
        for path in corpus
        if path != query_path
    ]
    scored.sort(key=lambda result: result.score, reverse=True)

    log.debug("neighbors_computed", mode=APPROXIMATE, query=query_path, scored=len(scored), k=k)
    return scored[:k]


def find_neighbors_exact(
    corpus: Mapping[str, str],
    file_index: Mapping[str, int],
    query_path: str,
    k: int = DEFAULT_EXACT_K,
    *,
    workers: int = 1,
) -> List[NeighborResult]:
    """Rank files by edit distance to ``query_path`` after length pruning.

    A file is a candidate only when its length is within half the query length
    of the query. Each candidate's distance is bounded by the query length;
    candidates beyond the bound are dropped. ``workers > 1`` spreads the
    distance computations over a process pool.
    """

    _require_query(corpus, query_path)
    if query_path not in file_index:
        raise InvalidArgumentError(
            f"Query path '{query_path}' is missing from the file index", query_path=query_path
        )
    _require_k(k)
    if workers < 1:
        raise InvalidArgumentError("workers must be at least 1", workers=workers)

    query = corpus[query_path]
    query_length = file_index[query_path]

    candidates: List[str] = []
    for path in corpus:
        if path == query_path:
            continue
        if path not in file_index:
            raise InvalidArgumentError(
                f"File index is out of sync with the corpus at '{path}'", path=path
            )
        if abs(file_index[path] - query_length) <= query_length / 2:
            candidates.append(path)

    if not query:
        log.debug("neighbors_skipped_empty_query", mode=EXACT, query=query_path)
        return []

    contents = [corpus[path] for path in candidates]
    distances = _compute_distances(query, contents, query_length, workers)

    ranked = [
        NeighborResult(path=path, score=int(distance))
        for path, content, distance in zip(candidates, contents, distances)
        if content and not exceeds_bound(distance, query_length)
    ]
    ranked.sort(key=lambda result: result.score)

    log.debug(
        "neighbors_computed",
        mode=EXACT,
        query=query_path,
        candidates=len(candidates),
        within_bound=len(ranked),
        k=k,
    )
    return ranked[:k]


def find_neighbors(
    corpus: Mapping[str, str],
    query_path: str,
    *,
    mode: str = APPROXIMATE,
    k: Optional[int] = None,
    file_index: Optional[Mapping[str, int]] = None,
    cache: Optional[NeighborCache] = None,
    corpus_sha: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> List[NeighborResult]:
    """Retrieve neighbors with the strategy named by ``mode``.

    When ``cache`` is given it is consulted first and filled after a miss. The
    cache key covers the corpus digest, so a changed corpus never serves stale
    tables.
    """

    if mode not in RETRIEVAL_MODES:
        raise InvalidArgumentError(
            f"Unknown retrieval mode '{mode}'", mode=mode, expected=list(RETRIEVAL_MODES)
        )
    _require_query(corpus, query_path)

    settings = settings or Settings()
    if k is None:
        k = settings.approximate_k if mode == APPROXIMATE else settings.exact_k

    key: Optional[CacheKey] = None
    if cache is not None:
        key = CacheKey(
            corpus_sha=corpus_sha or corpus_digest(corpus),
            query_path=query_path,
            mode=mode,
            k=k,
            num_hashes=settings.num_hashes if mode == APPROXIMATE else None,
        )
        cached = cache.get(key)
        if cached is not None:
            log.debug("cache_hit", mode=mode, query=query_path, k=k)
            return cached

    if mode == APPROXIMATE:
        results = find_neighbors_approximate(
            corpus, query_path, k, num_hashes=settings.num_hashes
        )
    else:
        index = file_index if file_index is not None else build_file_index(corpus)
        results = find_neighbors_exact(corpus, index, query_path, k, workers=settings.workers)

    if cache is not None and key is not None:
        cache.put(key, results)
    return results


def _compute_distances(
    query: str,
    contents: Sequence[str],
    bound: int,
    workers: int,
) -> List[float]:
    if workers <= 1 or len(contents) < 2:
        return [edit_distance(query, content, bound) for content in contents]

    chunksize = max(1, len(contents) // (workers * 4))
    with ProcessPoolExecutor(max_workers=workers) as executor:
        return list(
            executor.map(edit_distance, repeat(query), contents, repeat(bound), chunksize=chunksize)
        )


def _require_query(corpus: Mapping[str, str], query_path: str) -> None:
    if query_path not in corpus:
        raise InvalidArgumentError(
            f"Query path '{query_path}' is not in the corpus", query_path=query_path
        )


def _require_k(k: int) -> None:
    if k < 0:
        raise InvalidArgumentError("k must not be negative", k=k)

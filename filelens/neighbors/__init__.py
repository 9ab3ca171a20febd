"""Nearest-neighbor retrieval over text corpora."""

from .models import APPROXIMATE, EXACT, RETRIEVAL_MODES, CacheKey, NeighborCache, NeighborResult
from .retriever import (
    DEFAULT_APPROXIMATE_K,
    DEFAULT_EXACT_K,
    build_file_index,
    find_neighbors,
    find_neighbors_approximate,
    find_neighbors_exact,
)

__all__ = [
    "APPROXIMATE",
    "EXACT",
    "RETRIEVAL_MODES",
    "CacheKey",
    "NeighborCache",
    "NeighborResult",
    "DEFAULT_APPROXIMATE_K",
    "DEFAULT_EXACT_K",
    "build_file_index",
    "find_neighbors",
    "find_neighbors_approximate",
    "find_neighbors_exact",
]

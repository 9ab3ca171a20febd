"""Corpus loading and neighbor-table persistence for FileLens."""

from .corpus import Corpus, corpus_digest, load_corpus, snapshot
from .store import MemoryNeighborCache, NeighborStore, table_id

__all__ = [
    "Corpus",
    "corpus_digest",
    "load_corpus",
    "snapshot",
    "MemoryNeighborCache",
    "NeighborStore",
    "table_id",
]

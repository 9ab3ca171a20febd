"""Result and cache types shared by the neighbor retriever and its stores."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union

__all__ = [
    "APPROXIMATE",
    "EXACT",
    "RETRIEVAL_MODES",
    "CacheKey",
    "NeighborCache",
    "NeighborResult",
]

APPROXIMATE = "approximate"
EXACT = "exact"
RETRIEVAL_MODES = (APPROXIMATE, EXACT)

Score = Union[float, int]


@dataclass(frozen=True)
class NeighborResult:
    """One ranked neighbor.

    ``score`` is a similarity in ``[0, 1]`` for approximate retrieval (higher is
    closer) or an integer edit distance for exact retrieval (lower is closer).
    """

    path: str
    score: Score

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "score": self.score}

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "NeighborResult":
        return cls(path=str(row["path"]), score=row["score"])


@dataclass(frozen=True)
class CacheKey:
    """Identifies one neighbor table: a query against a corpus snapshot.

    ``num_hashes`` is the signature length behind approximate scores and is
    ``None`` for exact tables, whose distances do not depend on it.
    """

    corpus_sha: str
    query_path: str
    mode: str
    k: int
    num_hashes: Optional[int] = None


class NeighborCache(Protocol):
    """Get/put capability used to serve previously computed neighbor tables."""

    def get(self, key: CacheKey) -> Optional[List[NeighborResult]]:
        ...

    def put(self, key: CacheKey, results: List[NeighborResult]) -> None:
        ...

"""FileLens: nearest-neighbor retrieval and side-by-side diffing for text corpora."""

from filelens.distance import edit_distance
from filelens.errors import ConfigError, InvalidArgumentError
from filelens.fingerprint import fingerprint, similarity
from filelens.neighbors import (
    NeighborResult,
    build_file_index,
    find_neighbors,
    find_neighbors_approximate,
    find_neighbors_exact,
)
from filelens.viz.diffview import Alignment, LineRecord, align

__version__ = "0.1.0"

__all__ = [
    "Alignment",
    "ConfigError",
    "InvalidArgumentError",
    "LineRecord",
    "NeighborResult",
    "align",
    "build_file_index",
    "edit_distance",
    "find_neighbors",
    "find_neighbors_approximate",
    "find_neighbors_exact",
    "fingerprint",
    "similarity",
]

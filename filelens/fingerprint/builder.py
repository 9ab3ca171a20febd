"""Build MinHash signatures from file content."""
from __future__ import annotations

from typing import Dict, List, Mapping

from filelens.errors import InvalidArgumentError

__all__ = [
    "DEFAULT_NUM_HASHES",
    "EMPTY_SLOT",
    "MAX_FINGERPRINT_CHARS",
    "Signature",
    "fingerprint",
    "fingerprint_corpus",
    "shingle_hash",
]

Signature = List[int]

DEFAULT_NUM_HASHES = 10
MAX_FINGERPRINT_CHARS = 10_000

# One past the largest 32-bit hash, so an unfilled slot never equals a real hash.
EMPTY_SLOT = 1 << 32

_FNV_OFFSET = 0x811C9DC5
_FNV_PRIME = 16777619
_MASK32 = 0xFFFFFFFF


def shingle_hash(text: str, seed: int) -> int:
    """Return the seeded 32-bit FNV-1a style hash of ``text``'s UTF-8 bytes."""

    value = (seed ^ _FNV_OFFSET) & _MASK32
    for byte in text.encode("utf-8"):
        value ^= byte
        value = (value * _FNV_PRIME) & _MASK32
    return value


def fingerprint(content: str, num_hashes: int = DEFAULT_NUM_HASHES) -> Signature:
    """Return the MinHash signature of ``content``.

    Only the first :data:`MAX_FINGERPRINT_CHARS` characters are considered. Each
    line is one shingle (surrounding whitespace stripped). Slot ``i`` holds the
    minimum hash over all shingles under seed ``i``; empty content leaves every
    slot at :data:`EMPTY_SLOT`.
    """

    if num_hashes < 1:
        raise InvalidArgumentError("num_hashes must be at least 1", num_hashes=num_hashes)

    signature = [EMPTY_SLOT] * num_hashes
    if not content:
        return signature

    shingles = [line.strip() for line in content[:MAX_FINGERPRINT_CHARS].split("\n")]
    for seed in range(num_hashes):
        signature[seed] = min(shingle_hash(shingle, seed) for shingle in shingles)
    return signature


def fingerprint_corpus(
    corpus: Mapping[str, str],
    num_hashes: int = DEFAULT_NUM_HASHES,
) -> Dict[str, Signature]:
    """Fingerprint every file in ``corpus`` once, preserving iteration order."""

    return {path: fingerprint(content, num_hashes) for path, content in corpus.items()}

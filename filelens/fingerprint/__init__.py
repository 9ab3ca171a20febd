"""Fingerprint generation and comparison utilities."""

from .builder import (
    DEFAULT_NUM_HASHES,
    EMPTY_SLOT,
    MAX_FINGERPRINT_CHARS,
    Signature,
    fingerprint,
    fingerprint_corpus,
    shingle_hash,
)
from .similarity import similarity

__all__ = [
    "DEFAULT_NUM_HASHES",
    "EMPTY_SLOT",
    "MAX_FINGERPRINT_CHARS",
    "Signature",
    "fingerprint",
    "fingerprint_corpus",
    "shingle_hash",
    "similarity",
]

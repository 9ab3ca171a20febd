"""Signature comparison for FileLens fingerprints."""
from __future__ import annotations

from typing import Sequence

from filelens.errors import InvalidArgumentError

__all__ = ["similarity"]


def similarity(sig_a: Sequence[int], sig_b: Sequence[int]) -> float:
    """Return the fraction of positions where ``sig_a`` and ``sig_b`` agree.

    This estimates the Jaccard similarity of the underlying shingle sets. The
    estimate is biased for tiny or highly repetitive files (many blank lines
    collapse into one shingle) and is kept as-is.
    """

    if len(sig_a) != len(sig_b):
        raise InvalidArgumentError(
            "Signatures must share the same length",
            left=len(sig_a),
            right=len(sig_b),
        )
    if not sig_a:
        raise InvalidArgumentError("Signatures must not be empty")

    matches = sum(1 for a, b in zip(sig_a, sig_b) if a == b)
    return matches / len(sig_a)

"""Bounded Levenshtein edit distance."""
from __future__ import annotations

import math
from typing import Optional

__all__ = ["edit_distance", "exceeds_bound"]


def edit_distance(
    a: Optional[str],
    b: Optional[str],
    max_distance: float = math.inf,
) -> float:
    """Return the Levenshtein distance between ``a`` and ``b`` up to ``max_distance``.

    Insertions, deletions and substitutions each cost 1 and operate on code
    points. Two sentinel results are not real distances:

    * an empty or ``None`` input returns ``max_distance`` itself;
    * a pair provably further apart than ``max_distance`` returns
      ``max_distance + 1`` (see :func:`exceeds_bound`).

    The table is computed row by row with two rolling rows. As soon as every
    cell of a finished row is above ``max_distance`` the remaining rows are
    skipped, since no later cell can fall back under the bound.
    """

    if not a or not b:
        return max_distance

    if abs(len(a) - len(b)) > max_distance:
        return max_distance + 1

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i] * (len(b) + 1)
        row_min = i
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            value = min(
                previous[j] + 1,  # deletion
                current[j - 1] + 1,  # insertion
                previous[j - 1] + cost,  # substitution
            )
            current[j] = value
            if value < row_min:
                row_min = value
        if row_min > max_distance:
            return max_distance + 1
        previous = current

    distance = previous[-1]
    if distance > max_distance:
        return max_distance + 1
    return distance


def exceeds_bound(value: float, max_distance: float) -> bool:
    """Return ``True`` when ``value`` is the bound-exceeded sentinel."""

    return value > max_distance

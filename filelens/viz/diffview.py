"""Side-by-side line alignment for FileLens diff views."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Sequence

import structlog

from filelens.errors import InvalidArgumentError

__all__ = [
    "ALIGN_MODES",
    "DEFAULT_LCS_CELL_LIMIT",
    "MAX_HIGHLIGHT_WORDS",
    "Alignment",
    "LineRecord",
    "WordSpan",
    "align",
    "highlight_words",
    "longest_common_subsequence",
]

log = structlog.get_logger(__name__)

SAME = "same"
ADDED = "added"
REMOVED = "removed"
CHANGED = "changed"
BLANK = "blank"

LCS = "lcs"
PAIRWISE = "pairwise"
AUTO = "auto"
ALIGN_MODES = (LCS, PAIRWISE, AUTO)

MAX_HIGHLIGHT_WORDS = 100
DEFAULT_LCS_CELL_LIMIT = 4_000_000


class WordSpan(NamedTuple):
    text: str
    different: bool


@dataclass
class LineRecord:
    """One rendered row on one side of an alignment.

    ``kind`` is one of ``same``, ``added``, ``removed``, ``changed`` or
    ``blank``; blank rows are placeholders opposite a line with no counterpart.
    ``spans`` is only set on ``changed`` rows.
    """

    text: str
    kind: str
    spans: Optional[List[WordSpan]] = None

    @property
    def is_placeholder(self) -> bool:
        return self.kind == BLANK


@dataclass
class Alignment:
    """Parallel left/right rows; index ``i`` on both sides forms row ``i``."""

    left: List[LineRecord] = field(default_factory=list)
    right: List[LineRecord] = field(default_factory=list)
    mode: str = LCS

    def __len__(self) -> int:
        return len(self.left)

    def rows(self) -> List[tuple[LineRecord, LineRecord]]:
        return list(zip(self.left, self.right))

    def stats(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for record in (*self.left, *self.right):
            if record.kind != BLANK:
                counts[record.kind] = counts.get(record.kind, 0) + 1
        return counts


def align(
    left: Optional[str],
    right: Optional[str],
    *,
    mode: str = LCS,
    lcs_cell_limit: int = DEFAULT_LCS_CELL_LIMIT,
) -> Alignment:
    """Align ``left`` and ``right`` line by line.

    ``lcs`` realigns shifted lines through a longest common subsequence and
    marks the rest ``changed`` with word highlighting. ``pairwise`` compares the
    lines at two cursors and emits ``removed``/``added`` on any mismatch.
    ``auto`` uses ``lcs`` unless the table would exceed ``lcs_cell_limit`` cells.
    """

    if mode not in ALIGN_MODES:
        raise InvalidArgumentError(f"Unknown alignment mode '{mode}'", mode=mode)

    lines_left = (left or "").split("\n")
    lines_right = (right or "").split("\n")

    if mode == AUTO:
        cells = len(lines_left) * len(lines_right)
        if cells > lcs_cell_limit:
            log.info("align_fallback", cells=cells, limit=lcs_cell_limit, mode=PAIRWISE)
            mode = PAIRWISE
        else:
            mode = LCS

    if mode == PAIRWISE:
        return _align_pairwise(lines_left, lines_right)
    return _align_lcs(lines_left, lines_right)


def longest_common_subsequence(a: Sequence[str], b: Sequence[str]) -> List[str]:
    """Return one longest common subsequence of two line sequences."""

    n, m = len(a), len(b)
    # table[i][j] is the LCS length of a[i:] and b[j:]
    table = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        row, below = table[i], table[i + 1]
        for j in range(m - 1, -1, -1):
            if a[i] == b[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])

    result: List[str] = []
    i = j = 0
    while i < n and j < m:
        if a[i] == b[j]:
            result.append(a[i])
            i += 1
            j += 1
        elif table[i + 1][j] >= table[i][j + 1]:
            i += 1
        else:
            j += 1
    return result


def highlight_words(line: str, other: Optional[str]) -> List[WordSpan]:
    """Mark each word of ``line`` that does not occur anywhere in ``other``.

    Membership is order-insensitive. Only the first :data:`MAX_HIGHLIGHT_WORDS`
    words are compared; the remainder becomes one trailing highlighted span.
    """

    words = line.split(" ")
    other_words = set(other.split(" ")[:MAX_HIGHLIGHT_WORDS]) if other is not None else set()
    spans = [WordSpan(word, word not in other_words) for word in words[:MAX_HIGHLIGHT_WORDS]]
    if len(words) > MAX_HIGHLIGHT_WORDS:
        spans.append(WordSpan(" ".join(words[MAX_HIGHLIGHT_WORDS:]), True))
    return spans


def _align_lcs(lines_left: Sequence[str], lines_right: Sequence[str]) -> Alignment:
    common = longest_common_subsequence(lines_left, lines_right)
    result = Alignment(mode=LCS)

    i = j = k = 0
    while i < len(lines_left) or j < len(lines_right):
        anchor = common[k] if k < len(common) else None
        left_line = lines_left[i] if i < len(lines_left) else None
        right_line = lines_right[j] if j < len(lines_right) else None

        if anchor is not None and left_line == anchor and right_line == anchor:
            result.left.append(LineRecord(left_line, SAME))
            result.right.append(LineRecord(right_line, SAME))
            i += 1
            j += 1
            k += 1
            continue

        left_changed = left_line is not None and left_line != anchor
        right_changed = right_line is not None and right_line != anchor

        if left_changed and right_changed:
            result.left.append(LineRecord(left_line, CHANGED, highlight_words(left_line, right_line)))
            result.right.append(LineRecord(right_line, CHANGED, highlight_words(right_line, left_line)))
            i += 1
            j += 1
        elif left_changed:
            result.left.append(LineRecord(left_line, CHANGED, highlight_words(left_line, None)))
            result.right.append(LineRecord("", BLANK))
            i += 1
        else:
            result.left.append(LineRecord("", BLANK))
            result.right.append(LineRecord(right_line, CHANGED, highlight_words(right_line, None)))
            j += 1

    return result


def _align_pairwise(lines_left: Sequence[str], lines_right: Sequence[str]) -> Alignment:
    result = Alignment(mode=PAIRWISE)

    i = j = 0
    while i < len(lines_left) or j < len(lines_right):
        if i < len(lines_left) and j < len(lines_right) and lines_left[i] == lines_right[j]:
            result.left.append(LineRecord(lines_left[i], SAME))
            result.right.append(LineRecord(lines_right[j], SAME))
            i += 1
            j += 1
            continue

        if i < len(lines_left):
            result.left.append(LineRecord(lines_left[i], REMOVED))
            i += 1
        else:
            result.left.append(LineRecord("", BLANK))
        if j < len(lines_right):
            result.right.append(LineRecord(lines_right[j], ADDED))
            j += 1
        else:
            result.right.append(LineRecord("", BLANK))

    return result

"""Diff alignment and rendering helpers."""

from .diffview import (
    ALIGN_MODES,
    MAX_HIGHLIGHT_WORDS,
    Alignment,
    LineRecord,
    WordSpan,
    align,
    highlight_words,
    longest_common_subsequence,
)

__all__ = [
    "ALIGN_MODES",
    "MAX_HIGHLIGHT_WORDS",
    "Alignment",
    "LineRecord",
    "WordSpan",
    "align",
    "highlight_words",
    "longest_common_subsequence",
]

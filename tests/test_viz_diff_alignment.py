from __future__ import annotations

import pytest

from filelens.errors import InvalidArgumentError
from filelens.viz.diffview import (
    MAX_HIGHLIGHT_WORDS,
    WordSpan,
    align,
    highlight_words,
    longest_common_subsequence,
)


def _kinds(records):
    return [record.kind for record in records]


def test_changed_line_between_common_lines() -> None:
    alignment = align("a\nb\nc", "a\nx\nc")

    assert len(alignment.left) == len(alignment.right) == 3
    assert _kinds(alignment.left) == ["same", "changed", "same"]
    assert _kinds(alignment.right) == ["same", "changed", "same"]
    assert alignment.left[1].text == "b"
    assert alignment.right[1].text == "x"
    assert alignment.left[1].spans == [WordSpan("b", True)]
    assert alignment.right[1].spans == [WordSpan("x", True)]


def test_inserted_line_is_padded_on_the_other_side() -> None:
    alignment = align("a\nc", "a\nb\nc")

    assert _kinds(alignment.left) == ["same", "blank", "same"]
    assert _kinds(alignment.right) == ["same", "changed", "same"]
    assert alignment.left[1].text == ""
    assert alignment.left[1].is_placeholder
    assert not alignment.right[1].is_placeholder


def test_shifted_lines_realign() -> None:
    left = "header\none\ntwo\nthree"
    right = "one\ntwo\nthree\nfooter"

    alignment = align(left, right)

    same_rows = [record.text for record in alignment.left if record.kind == "same"]
    assert same_rows == ["one", "two", "three"]


@pytest.mark.parametrize("mode", ["lcs", "pairwise"])
def test_rows_reconstruct_both_inputs(mode: str) -> None:
    left = "def f():\n    return 1\n\nprint(f())"
    right = "import os\ndef f():\n    return 2\nprint(f())\n"

    alignment = align(left, right, mode=mode)

    assert len(alignment.left) == len(alignment.right)
    assert [r.text for r in alignment.left if r.kind not in ("added", "blank")] == left.split("\n")
    assert [r.text for r in alignment.right if r.kind not in ("removed", "blank")] == right.split("\n")


def test_pairwise_mode_marks_removed_and_added() -> None:
    alignment = align("a\nb\nc", "a\nc", mode="pairwise")

    assert alignment.mode == "pairwise"
    assert _kinds(alignment.left) == ["same", "removed", "removed"]
    assert _kinds(alignment.right) == ["same", "added", "blank"]
    assert all(record.spans is None for record in alignment.left + alignment.right)


def test_word_highlighting_is_set_membership() -> None:
    spans = highlight_words("the quick fox", "fox the slow")

    assert spans == [WordSpan("the", False), WordSpan("quick", True), WordSpan("fox", False)]
    assert highlight_words("alone here", None) == [WordSpan("alone", True), WordSpan("here", True)]


def test_word_highlighting_caps_long_lines() -> None:
    words = [f"w{i}" for i in range(MAX_HIGHLIGHT_WORDS + 5)]
    line = " ".join(words)

    spans = highlight_words(line, line)

    assert len(spans) == MAX_HIGHLIGHT_WORDS + 1
    assert not any(span.different for span in spans[:-1])
    assert spans[-1] == WordSpan(" ".join(words[MAX_HIGHLIGHT_WORDS:]), True)


def test_auto_mode_falls_back_for_large_tables() -> None:
    assert align("a\nb", "a\nc", mode="auto", lcs_cell_limit=1).mode == "pairwise"
    assert align("a\nb", "a\nc", mode="auto").mode == "lcs"


def test_lcs_and_edge_inputs() -> None:
    assert longest_common_subsequence(["a", "b", "c", "d"], ["b", "x", "d"]) == ["b", "d"]
    assert longest_common_subsequence([], ["a"]) == []

    alignment = align(None, "")
    assert len(alignment) == 1
    assert alignment.stats() == {"same": 2}


def test_unknown_mode_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        align("a", "b", mode="char")

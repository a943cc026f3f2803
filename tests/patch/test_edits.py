"""Tests for positional text edits."""

from __future__ import annotations

import pytest

from pgtypegen.core.errors import EditOverlapError
from pgtypegen.patch.edits import TextEdit, apply_edits, validate_edits


class TestApplyEdits:
    """Back-to-front splicing."""

    def test_no_edits_returns_content(self) -> None:
        assert apply_edits(b"hello", []) == b"hello"

    def test_replacements_of_different_lengths(self) -> None:
        content = b"aaa bbb ccc"
        edits = [
            TextEdit(0, 3, "x"),
            TextEdit(8, 11, "zzzzz"),
            TextEdit(4, 7, ""),
        ]

        assert apply_edits(content, edits) == b"x  zzzzz"

    def test_insertions_at_start_and_end(self) -> None:
        edits = [TextEdit(0, 0, "<"), TextEdit(3, 3, ">")]

        assert apply_edits(b"abc", edits) == b"<abc>"

    def test_insertion_touching_replacement(self) -> None:
        """An insertion at the end of a replaced span lands after the replacement."""
        edits = [TextEdit(1, 3, "X"), TextEdit(3, 3, "!")]

        assert apply_edits(b"abcd", edits) == b"aX!d"

    def test_insertion_touching_replacement_start(self) -> None:
        edits = [TextEdit(0, 0, "!"), TextEdit(0, 2, "X")]

        assert apply_edits(b"abcd", edits) == b"!Xcd"

    def test_offsets_are_bytes(self) -> None:
        content = "é = sql`x`".encode()  # é is two bytes
        start = content.index(b"sql")

        result = apply_edits(content, [TextEdit(start, start + 3, "sql<q.T>")])

        assert result.decode() == "é = sql<q.T>`x`"


class TestValidateEdits:
    """Overlap detection fails loudly."""

    def test_overlapping_spans_raise(self) -> None:
        with pytest.raises(EditOverlapError):
            apply_edits(b"abcdef", [TextEdit(0, 3, "x"), TextEdit(2, 5, "y")])

    def test_nested_span_raises(self) -> None:
        with pytest.raises(EditOverlapError):
            validate_edits([TextEdit(0, 10, ""), TextEdit(2, 3, "")], 10)

    def test_overlap_with_earlier_wide_span_raises(self) -> None:
        """A wide edit overlapping a later one is caught past a small edit in between."""
        with pytest.raises(EditOverlapError):
            validate_edits([TextEdit(0, 10, ""), TextEdit(1, 2, ""), TextEdit(5, 6, "")], 10)

    def test_insertion_inside_span_raises(self) -> None:
        with pytest.raises(EditOverlapError):
            validate_edits([TextEdit(0, 5, ""), TextEdit(3, 3, "x")], 10)

    def test_two_insertions_same_offset_raise(self) -> None:
        with pytest.raises(EditOverlapError) as exc_info:
            validate_edits([TextEdit(4, 4, "a"), TextEdit(4, 4, "b")], 10, "src/a.ts")

        assert exc_info.value.details["path"] == "src/a.ts"

    def test_adjacent_spans_allowed(self) -> None:
        validate_edits([TextEdit(0, 3, ""), TextEdit(3, 6, "")], 6)

    def test_out_of_range_raises(self) -> None:
        with pytest.raises(ValueError, match="outside content"):
            validate_edits([TextEdit(2, 12, "")], 10)

    def test_inverted_span_raises(self) -> None:
        with pytest.raises(ValueError):
            validate_edits([TextEdit(5, 2, "")], 10)

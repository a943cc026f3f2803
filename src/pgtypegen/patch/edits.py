"""Positional text edits over UTF-8 byte offsets.

Edits are computed against the original content and applied back to front
(descending end offset), so each splice leaves the offsets of every edit still
to be applied untouched.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from pgtypegen.core.errors import EditOverlapError


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace content[start:end] with replacement."""

    start: int
    end: int
    replacement: str

    @property
    def span(self) -> tuple[int, int]:
        return (self.start, self.end)

    @property
    def is_insertion(self) -> bool:
        return self.start == self.end


def validate_edits(edits: Sequence[TextEdit], length: int, path: str = "<memory>") -> None:
    """Check every edit lies within the content and none overlap.

    Edits may touch (one ends where the next starts). Two insertions at the
    same offset count as overlapping since their order would be ambiguous.

    Raises:
        EditOverlapError: Two edits overlap.
        ValueError: An edit lies outside the content.
    """
    for e in edits:
        if not 0 <= e.start <= e.end <= length:
            raise ValueError(f"Edit {e.span} outside content of length {length} in {path}")

    ordered = sorted(edits, key=lambda e: (e.start, e.end))
    widest: TextEdit | None = None  # Edit reaching furthest so far
    for prev, cur in zip(ordered, ordered[1:], strict=False):
        if widest is None or prev.end > widest.end:
            widest = prev
        if cur.start < widest.end:
            raise EditOverlapError.between(path, widest.span, cur.span)
        if cur.is_insertion and prev.is_insertion and cur.start == prev.start:
            raise EditOverlapError.between(path, prev.span, cur.span)


def apply_edits(content: bytes, edits: Sequence[TextEdit], path: str = "<memory>") -> bytes:
    """Apply non-overlapping edits to content.

    Raises:
        EditOverlapError: Two edits overlap.
    """
    validate_edits(edits, len(content), path)
    # Same end: apply the later start first so [a, b) stays valid after inserting at b.
    for e in sorted(edits, key=lambda e: (-e.end, -e.start)):
        content = content[: e.start] + e.replacement.encode("utf-8") + content[e.end :]
    return content

"""Text helpers shared by the renderer, the output router and the CLI.

Design principles:
- Generated comments stay on one line where possible
- Paths in generated imports always use forward slashes
- Terminal summaries are grammatically correct (1 file vs 2 files)
"""

from __future__ import annotations

import os
import posixpath
import re

_WHITESPACE = re.compile(r"\s+")


def simplify_whitespace(text: str) -> str:
    """Collapse every run of whitespace to a single space.

    Examples:
        "select *\\n  from foo" -> "select * from foo"
    """
    return _WHITESPACE.sub(" ", text).strip()


def truncate(text: str, max_len: int = 100, marker: str = "...") -> str:
    """Truncate text in the middle, keeping its head and tail.

    Queries tend to differ at both ends (selected columns, where clause),
    so both are kept.

    Examples:
        truncate("abcdefghij", 7) -> "ab...ij"
        truncate("short", 7) -> "short"
    """
    if len(text) <= max_len:
        return text
    half = (max_len - len(marker)) // 2
    if half <= 0:
        return marker
    return text[:half] + marker + text[-half:]


def escape_comment(text: str) -> str:
    """Make text safe to embed in a ``/** ... */`` block comment."""
    return text.replace("*/", "*\\/")


def relative_unix_path(path: str, start: str) -> str:
    """Relative path from *start* to *path*, always with forward slashes.

    Examples:
        relative_unix_path("src/__sql__/a.ts", "src") -> "__sql__/a.ts"
    """
    relative = os.path.relpath(path, start)
    return posixpath.join(*relative.split(os.sep))


def compress_path(path: str, max_len: int = 40) -> str:
    """Compress path to fit within max_len.

    Examples:
        src/app/db/queries/users.ts -> src/.../users.ts
        short/path.ts -> short/path.ts (unchanged)
    """
    if len(path) <= max_len:
        return path

    parts = path.split("/")
    if len(parts) <= 2:
        return path

    compressed = f"{parts[0]}/.../{parts[-1]}"
    if len(compressed) <= max_len:
        return compressed

    return parts[-1]


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return grammatically correct singular/plural form.

    Examples:
        pluralize(1, "file") -> "1 file"
        pluralize(3, "query", "queries") -> "3 queries"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"

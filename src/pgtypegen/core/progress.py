"""Terminal feedback for CLI commands.

Everything here prints to stderr; stdout is left to command results.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console

_console = Console(stderr=True, highlight=False)

_MARKERS = {
    "success": "[green]✓[/green]",
    "error": "[red]✗[/red]",
    "warning": "[yellow]![/yellow]",
}


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print one status line, e.g. ``status("Done", style="success")`` -> ``✓ Done``."""
    marker = _MARKERS.get(style)
    line = f"{marker} {message}" if marker else message
    _console.print(" " * indent + line)


@contextmanager
def spinner(message: str) -> Iterator[None]:
    """Animate *message* while the block runs; print it once when not on a terminal."""
    if not _console.is_terminal:
        status(message)
        yield
        return
    with _console.status(message):
        yield

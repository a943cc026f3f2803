"""Write results."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Literal


@dataclass
class FileDelta:
    """Outcome for a single written (or skipped) file."""

    path: str
    action: Literal["created", "updated", "unchanged"]
    old_hash: str | None = None
    new_hash: str | None = None


@dataclass
class WriteResult:
    """Result of write_typescript_files."""

    run_id: str
    queries: int
    tags: int
    files: list[FileDelta] = field(default_factory=list)

    @property
    def files_changed(self) -> int:
        return sum(1 for f in self.files if f.action != "unchanged")


def hash_content(content: str) -> str:
    """Hash content for delta tracking."""
    return hashlib.sha256(content.encode()).hexdigest()[:12]

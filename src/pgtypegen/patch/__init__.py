"""Syntax-tree driven source patching."""

from pgtypegen.patch.edits import TextEdit, apply_edits, validate_edits
from pgtypegen.patch.parser import ParseResult, TypeScriptParser
from pgtypegen.patch.source import SourcePatcher

__all__ = [
    "TextEdit",
    "apply_edits",
    "validate_edits",
    "ParseResult",
    "TypeScriptParser",
    "SourcePatcher",
]

"""Source patching: parse, schedule edits, splice."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from pgtypegen.core.logging import get_logger
from pgtypegen.patch.edits import TextEdit, apply_edits
from pgtypegen.patch.parser import TypeScriptParser
from pgtypegen.patch.visitor import find_call_site_edits, find_queries_region
from pgtypegen.queries.models import TaggedQuery

log = get_logger(__name__)


class SourcePatcher:
    """Rewrites ``sql`` call sites and the managed declarations region of a file.

    Nothing else in the file changes: the only edits are the region deletion,
    the call-site tag rewrites, and the optional trailing block / leading
    import supplied by the caller.
    """

    def __init__(self, parser: TypeScriptParser | None = None, *, namespace: str = "queries") -> None:
        self._parser = parser or TypeScriptParser()
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    def supports(self, path: Path) -> bool:
        return self._parser.supports(path)

    def plan(self, path: Path, content: bytes, group: Sequence[TaggedQuery]) -> list[TextEdit]:
        """Edits derived from the syntax tree of *content*."""
        result = self._parser.parse(path, content)
        if result.error_count:
            log.warning("source_has_syntax_errors", path=str(path), errors=result.error_count)

        edits = find_queries_region(result.root_node, self._namespace)
        if len(edits) > 1:
            log.warning("multiple_queries_regions", path=str(path), count=len(edits))
        edits.extend(find_call_site_edits(result.root_node, group, self._namespace))
        return edits

    def patch(
        self,
        path: Path,
        source: str,
        group: Sequence[TaggedQuery],
        *,
        trailing_block: str | None = None,
        import_statement: str | None = None,
    ) -> str:
        """Return *source* with call sites tagged and declarations placed.

        Args:
            path: Source path, used for grammar detection and messages.
            source: Original file text.
            group: Tagged queries discovered in this file.
            trailing_block: Declarations appended at end of file, replacing
                trailing whitespace.
            import_statement: Line inserted at the very top of the file.

        Raises:
            EditOverlapError: Scheduled edits overlap.
        """
        content = source.encode("utf-8")
        edits = self.plan(path, content, group)

        if trailing_block is not None:
            body_end = len(content.rstrip())
            separator = "\n\n" if body_end else ""
            edits.append(TextEdit(start=body_end, end=len(content), replacement=separator + trailing_block))

        if import_statement is not None:
            edits.append(TextEdit(start=0, end=0, replacement=import_statement + "\n"))

        log.debug("edits_planned", path=str(path), edits=len(edits))
        return apply_edits(content, edits, str(path)).decode("utf-8")

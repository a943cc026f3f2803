"""Write pipeline - the entry point turning analysed queries into typed sources.

Order of operations:
1. Assign tags over every query of every file.
2. Render every tag group once; an inconsistent group aborts here.
3. Check every source file can be parsed.
4. Route and patch each file in turn.

Nothing is written before step 4, so failures in 1-3 leave the tree untouched.
A failure during step 4 aborts the remaining files.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from pgtypegen.config.models import TypegenConfig
from pgtypegen.core.errors import UnsupportedSourceError
from pgtypegen.core.logging import clear_run_id, get_logger, set_run_id
from pgtypegen.patch.parser import TypeScriptParser
from pgtypegen.patch.source import SourcePatcher
from pgtypegen.queries.models import AnalysedQuery, group_by_file
from pgtypegen.queries.tags import assign_tags
from pgtypegen.render.interfaces import check_consistency
from pgtypegen.write.formatting import Formatter, formatter_from_config
from pgtypegen.write.models import WriteResult
from pgtypegen.write.router import (
    SQL_EXTENSION,
    FileWriter,
    GetQueriesModule,
    get_queries_module_from_config,
)

log = get_logger(__name__)


def write_typescript_files(
    queries: Sequence[AnalysedQuery],
    *,
    get_queries_module: GetQueriesModule | None = None,
    formatter: Formatter | None = None,
    config: TypegenConfig | None = None,
    parser: TypeScriptParser | None = None,
) -> WriteResult:
    """Tag every query and write the typed sources and declaration files.

    Args:
        queries: Analysed queries from every discovered source file.
        get_queries_module: Maps a source path to the file receiving its
            declarations. Returning the source path itself appends a
            ``module queries`` block to that file. Defaults to
            ``default_get_queries_module`` with the configured directory.
        formatter: Applied to every file before it is written. Defaults to
            the configured formatter command.
        config: Settings; defaults are used when omitted.
        parser: Tree-sitter parser to reuse across calls.

    Raises:
        ConsistencyError: A tag group renders different interface bodies.
        UnsupportedSourceError: A source file has no known grammar.
        EditOverlapError: Edits scheduled for a file overlap.
        FormatterError: The formatter failed.
        OSError: Reading or writing a file failed.
    """
    config = config or TypegenConfig()
    run_id = set_run_id()
    try:
        tagged = assign_tags(queries)
        check_consistency(tagged)

        patcher = SourcePatcher(parser, namespace=config.write.namespace)
        by_file = group_by_file(tagged)
        for file in by_file:
            if not file.endswith(SQL_EXTENSION) and not patcher.supports(Path(file)):
                raise UnsupportedSourceError.extension(file)

        writer = FileWriter(
            get_queries_module or get_queries_module_from_config(config.write),
            formatter or formatter_from_config(config.formatter),
            patcher,
            max_query_length=config.write.max_query_length,
        )

        result = WriteResult(
            run_id=run_id,
            queries=len(tagged),
            tags=len({q.tag for q in tagged}),
        )
        for file, group in by_file.items():
            result.files.extend(writer.write(file, group))

        log.info(
            "write_complete",
            queries=result.queries,
            tags=result.tags,
            files_changed=result.files_changed,
        )
        return result
    finally:
        clear_run_id()

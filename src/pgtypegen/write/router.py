"""Output routing: where a file's declarations live and how the file reaches them.

When the destination returned by ``get_queries_module`` is the source file
itself, declarations are appended to it as a trailing ``module queries``
block. Otherwise they are written standalone to the destination and the
source gets an ``import * as queries from '...'`` line unless one is already
there.
"""

from __future__ import annotations

import functools
import os
import re
from collections.abc import Callable, Sequence
from pathlib import Path

from pgtypegen.config.models import WriteConfig
from pgtypegen.core.logging import get_logger
from pgtypegen.core.text import relative_unix_path
from pgtypegen.patch.source import SourcePatcher
from pgtypegen.queries.models import TaggedQuery
from pgtypegen.render.interfaces import queries_module, query_interfaces
from pgtypegen.write.formatting import Formatter
from pgtypegen.write.models import FileDelta, hash_content

log = get_logger(__name__)

GetQueriesModule = Callable[[str], str]

_IMPORT_EXTENSION = re.compile(r"\.(js|ts|tsx)$")

SQL_EXTENSION = ".sql"


def default_get_queries_module(
    file_path: str,
    *,
    queries_dir: str = "__sql__",
    typed_extensions: Sequence[str] = (".ts", ".tsx", ".mts", ".cts"),
) -> str:
    """Keep declarations in typed sources; others get a sibling ``__sql__/<name>.ts``."""
    if file_path.endswith(tuple(typed_extensions)):
        return file_path
    return os.path.join(os.path.dirname(file_path), queries_dir, os.path.basename(file_path) + ".ts")


def get_queries_module_from_config(config: WriteConfig) -> GetQueriesModule:
    return functools.partial(
        default_get_queries_module,
        queries_dir=config.queries_dir,
        typed_extensions=tuple(config.typed_extensions),
    )


def import_statement(source_path: str, dest_path: str, namespace: str = "queries") -> str:
    relative = relative_unix_path(dest_path, os.path.dirname(source_path) or ".")
    relative = _IMPORT_EXTENSION.sub("", relative)
    if not relative.startswith("../"):
        relative = "./" + relative
    return f"import * as {namespace} from '{relative}'"


def import_exists(source: str, statement: str) -> bool:
    """Textual check for the import in single-quoted, double-quoted or default-import form."""
    return (
        statement in source
        or statement.replace("'", '"') in source
        or statement.replace("import * as", "import") in source
    )


def same_file(a: str, b: str) -> bool:
    return os.path.normpath(a) == os.path.normpath(b)


class FileWriter:
    """Writes one source file's declarations and patches the file itself."""

    def __init__(
        self,
        get_queries_module: GetQueriesModule,
        formatter: Formatter,
        patcher: SourcePatcher,
        *,
        max_query_length: int = 100,
    ) -> None:
        self._get_queries_module = get_queries_module
        self._formatter = formatter
        self._patcher = patcher
        self._max_query_length = max_query_length

    def write(self, file: str, group: Sequence[TaggedQuery]) -> list[FileDelta]:
        """Write declarations for *group* and patch *file*.

        Raises:
            OSError: Reading or writing a file failed.
            EditOverlapError: Scheduled edits overlap.
            FormatterError: The formatter failed.
        """
        dest = self._get_queries_module(file)
        inline = same_file(dest, file)
        namespace = self._patcher.namespace

        if file.endswith(SQL_EXTENSION):
            if inline:
                log.warning("sql_source_needs_separate_module", path=file)
                return []
            # TODO: emit a TypeScript module linking the .sql file to its declarations
            log.info("sql_source_not_linked", path=file, queries_module=dest)
            return [self._persist(Path(dest), self._interfaces(group))]

        source_path = Path(file)
        source = source_path.read_text(encoding="utf-8")
        deltas: list[FileDelta] = []

        if inline:
            block = queries_module(group, namespace=namespace, max_query_length=self._max_query_length)
            patched = self._patcher.patch(source_path, source, group, trailing_block=block)
        else:
            deltas.append(self._persist(Path(dest), self._interfaces(group)))
            statement = import_statement(file, dest, namespace)
            if import_exists(source, statement):
                log.debug("import_exists", path=file, statement=statement)
                patched = self._patcher.patch(source_path, source, group)
            else:
                patched = self._patcher.patch(source_path, source, group, import_statement=statement)

        deltas.append(self._persist(source_path, patched, existing=source))
        return deltas

    def _interfaces(self, group: Sequence[TaggedQuery]) -> str:
        return query_interfaces(group, max_query_length=self._max_query_length) + "\n"

    def _persist(self, path: Path, content: str, *, existing: str | None = None) -> FileDelta:
        formatted = self._formatter(str(path), content)
        if existing is None and path.exists():
            existing = path.read_text(encoding="utf-8")

        new_hash = hash_content(formatted)
        if existing is None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(formatted, encoding="utf-8")
            log.info("file_created", path=str(path))
            return FileDelta(path=str(path), action="created", new_hash=new_hash)

        old_hash = hash_content(existing)
        if existing == formatted:
            return FileDelta(path=str(path), action="unchanged", old_hash=old_hash, new_hash=new_hash)

        path.write_text(formatted, encoding="utf-8")
        log.info("file_updated", path=str(path))
        return FileDelta(path=str(path), action="updated", old_hash=old_hash, new_hash=new_hash)

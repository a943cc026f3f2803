"""TypeScript interface rendering for tagged query groups.

Output is already indented the way prettier would print it, so the files
read well even when no formatter is configured.
"""

from __future__ import annotations

import json
import re
import textwrap
from collections.abc import Iterable, Sequence

from pgtypegen.core.errors import ConsistencyError
from pgtypegen.core.text import escape_comment, simplify_whitespace, truncate
from pgtypegen.queries.models import Field, TaggedQuery, group_by_tag

# Types that already admit null
_UNIVERSAL_TYPES = frozenset({"any", "unknown"})

_COMPOUND_TYPE = re.compile(r"[|&\s]|=>")

_INDENT = "  "


def jsdoc_query(sql: str, max_len: int = 100) -> str:
    return truncate(simplify_whitespace(sql), max_len)


def jsdoc_comment(lines: Iterable[str | None]) -> str:
    """Render a JSDoc comment from paragraphs, skipping missing ones.

    Returns an empty string when there is nothing to say.
    """
    middle = "\n\n".join(line for line in lines if isinstance(line, str)).strip()
    if not middle:
        return ""
    middle = escape_comment(middle)
    if "\n" not in middle:
        return f"/** {middle} */"
    body = "\n".join(f" * {line}".rstrip() for line in middle.split("\n"))
    return f"/**\n{body}\n */"


def field_type(f: Field) -> str:
    if f.not_null or f.typescript in _UNIVERSAL_TYPES:
        return f.typescript
    base = f"({f.typescript})" if _COMPOUND_TYPE.search(f.typescript) else f.typescript
    return f"{base} | null"


def field_meta(f: Field) -> str:
    """``column: `a.b.c`, not null: `true`, postgres type: `text` `` minus absent entries."""
    entries = {"column": f.column, "not null": f.not_null, "postgres type": f.gdesc}
    return ", ".join(
        f"{key}: `{'true' if value is True else value}`" for key, value in entries.items() if value
    )


def render_field(f: Field) -> str:
    # Column names need not be identifiers, so the key is always a string literal.
    prop = f"{json.dumps(f.name)}: {field_type(f)}"
    comment = jsdoc_comment([f.comment, field_meta(f) or None])
    return f"{comment}\n{prop}" if comment else prop


def interface_body(query: TaggedQuery) -> str:
    if not query.fields:
        return "{}"
    members = "\n\n".join(render_field(f) for f in query.fields)
    return "{\n" + textwrap.indent(members, _INDENT) + "\n}"


def _unique(values: Iterable[str | None]) -> list[str]:
    seen: dict[str, None] = {}
    for v in values:
        if v:
            seen.setdefault(v, None)
    return list(seen)


def render_query_interface(
    group: Sequence[TaggedQuery],
    interface_name: str,
    *,
    max_query_length: int = 100,
) -> str:
    """Render ``export interface <name>`` for queries sharing one tag.

    Raises:
        ConsistencyError: The queries in the group render different bodies.
    """
    bodies = [interface_body(q) for q in group]
    if len(set(bodies)) != 1:
        raise ConsistencyError.inconsistent_bodies(interface_name, sorted(set(bodies)))

    sqls = _unique(jsdoc_query(q.sql, max_query_length) for q in group)
    comments = _unique(q.comment for q in group)
    if len(sqls) == 1:
        summary = f"- query: `{sqls[0]}`"
    else:
        summary = "queries:\n" + "\n".join(f"- `{s}`" for s in sqls)

    comment = jsdoc_comment([summary, *comments])
    return f"{comment}\nexport interface {interface_name} {bodies[0]}"


def query_interfaces(group: Sequence[TaggedQuery], *, max_query_length: int = 100) -> str:
    """Render every interface of a file's queries, one per tag."""
    return "\n\n".join(
        render_query_interface(queries, tag, max_query_length=max_query_length)
        for tag, queries in group_by_tag(group).items()
    )


def queries_module(
    group: Sequence[TaggedQuery],
    *,
    namespace: str = "queries",
    max_query_length: int = 100,
) -> str:
    """Render the trailing ``module queries { ... }`` block for inline output."""
    interfaces = query_interfaces(group, max_query_length=max_query_length)
    return f"module {namespace} {{\n" + textwrap.indent(interfaces, _INDENT) + "\n}\n"


def check_consistency(tagged: Sequence[TaggedQuery]) -> None:
    """Fail if any tag, across every file, renders more than one body.

    Run before any file is written so a violation leaves the tree untouched.
    """
    for tag, queries in group_by_tag(tagged).items():
        bodies = {interface_body(q) for q in queries}
        if len(bodies) != 1:
            raise ConsistencyError.inconsistent_bodies(tag, sorted(bodies))

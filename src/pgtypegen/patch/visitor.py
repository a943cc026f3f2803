"""Syntax-tree walk that schedules the edits for one source file.

Two things are located:

- the managed declarations region: a top-level ``module queries { ... }`` (or
  ``namespace queries``) statement, owned entirely by the generator and
  always deleted so it can be re-appended fresh;
- ``sql`` call sites: tagged templates whose tag is the bare identifier
  ``sql``, optionally already carrying type arguments. tree-sitter reads
  ``sql<queries.Tag>`...``` as ``(sql < queries.Tag) > `...```, so that
  binary-expression shape counts as a call site too. A call site whose
  source text matches an analysed query gets its tag rewritten to
  ``sql<queries.Tag>``; unmatched call sites are left alone.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from pgtypegen.patch.edits import TextEdit
from pgtypegen.queries.models import TaggedQuery

_MODULE_TYPES = frozenset({"module", "internal_module"})

SQL_TAG = b"sql"


def _text(node: Any) -> bytes:
    return node.text or b""


def _walk(root: Any) -> Iterator[Any]:
    """Pre-order traversal (document order)."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _module_declaration(statement: Any) -> Any | None:
    if statement.type in _MODULE_TYPES:
        return statement
    if statement.type == "expression_statement" and statement.named_child_count == 1:
        inner = statement.named_children[0]
        if inner.type in _MODULE_TYPES:
            return inner
    return None


def find_queries_region(root: Any, namespace: str = "queries") -> list[TextEdit]:
    """Deletion edits for the managed region, including its leading whitespace."""
    edits: list[TextEdit] = []
    wanted = namespace.encode("utf-8")
    for statement in root.children:
        module = _module_declaration(statement)
        if module is None:
            continue
        name = module.child_by_field_name("name")
        if name is None or _text(name) != wanted:
            continue
        previous = statement.prev_sibling
        start = previous.end_byte if previous is not None else 0
        edits.append(TextEdit(start=start, end=statement.end_byte, replacement=""))
    return edits


def _is_sql_identifier(node: Any | None) -> bool:
    return node is not None and node.type == "identifier" and _text(node) == SQL_TAG


def _binary_operator(node: Any) -> bytes:
    operator = node.child_by_field_name("operator")
    return _text(operator) if operator is not None else b""


def sql_tag_span(node: Any) -> tuple[int, int] | None:
    """Byte span from the ``sql`` tag to the template start, or None.

    Covers ``sql`...``` (a call expression with a template argument) and
    ``sql<T>`...``` (parsed as ``(sql < T) > `...```).
    """
    if node.type == "call_expression":
        function = node.child_by_field_name("function")
        arguments = node.child_by_field_name("arguments")
        if _is_sql_identifier(function) and arguments is not None and arguments.type == "template_string":
            return (function.start_byte, arguments.start_byte)
        return None

    if node.type == "binary_expression" and _binary_operator(node) == b">":
        template = node.child_by_field_name("right")
        comparison = node.child_by_field_name("left")
        if (
            template is not None
            and template.type == "template_string"
            and comparison is not None
            and comparison.type == "binary_expression"
            and _binary_operator(comparison) == b"<"
            and _is_sql_identifier(comparison.child_by_field_name("left"))
        ):
            return (comparison.start_byte, template.start_byte)
    return None


def is_sql_call_site(node: Any) -> bool:
    return sql_tag_span(node) is not None


def find_call_site_edits(
    root: Any,
    group: Sequence[TaggedQuery],
    namespace: str = "queries",
) -> list[TextEdit]:
    """Tag-rewrite edits for every call site that matches a query in *group*.

    The first query whose text matches wins; repeated identical call-site
    text within one file always binds to that first query.
    """
    edits: list[TextEdit] = []
    for node in _walk(root):
        span = sql_tag_span(node)
        if span is None:
            continue
        node_text = _text(node).decode("utf-8")
        match = next((q for q in group if q.text.strip() == node_text), None)
        if match is None:
            continue
        edits.append(TextEdit(start=span[0], end=span[1], replacement=f"sql<{namespace}.{match.tag}>"))
    return edits

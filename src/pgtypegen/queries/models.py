"""Analysed query records handed over by the query analysis step.

The analysis step (call-site discovery plus database type inference) runs
outside this package. It produces camelCase JSON records, which
``AnalysedQuery.from_dict`` accepts directly.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Field:
    """One output column of a query."""

    name: str
    typescript: str  # Rendered scalar type, e.g. "number"
    not_null: bool = False
    column: str | None = None  # Schema-qualified source column
    gdesc: str | None = None  # Native postgres type name
    comment: str | None = None  # Column comment from the database

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Field:
        return cls(
            name=data["name"],
            typescript=data["typescript"],
            not_null=bool(data.get("notNull", False)),
            column=data.get("column"),
            gdesc=data.get("gdesc"),
            comment=data.get("comment"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "typescript": self.typescript,
            "notNull": self.not_null,
            "column": self.column,
            "gdesc": self.gdesc,
            "comment": self.comment,
        }


@dataclass(frozen=True, slots=True)
class AnalysedQuery:
    """A query call site with its inferred result shape."""

    file: str
    sql: str
    text: str  # Exact call-site source text, used to find the node again
    fields: tuple[Field, ...]
    suggested_tags: tuple[str, ...]  # Most preferred first
    comment: str | None = None

    def __post_init__(self) -> None:
        if not self.suggested_tags:
            raise ValueError(f"Query in {self.file} has no suggested tags: {self.sql!r}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AnalysedQuery:
        return cls(
            file=data["file"],
            sql=data["sql"],
            text=data["text"],
            fields=tuple(Field.from_dict(f) for f in data.get("fields", [])),
            suggested_tags=tuple(data["suggestedTags"]),
            comment=data.get("comment"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "sql": self.sql,
            "text": self.text,
            "fields": [f.to_dict() for f in self.fields],
            "suggestedTags": list(self.suggested_tags),
            "comment": self.comment,
        }


@dataclass(frozen=True, slots=True)
class TaggedQuery:
    """An analysed query with its resolved interface name."""

    query: AnalysedQuery
    tag: str

    @property
    def file(self) -> str:
        return self.query.file

    @property
    def sql(self) -> str:
        return self.query.sql

    @property
    def text(self) -> str:
        return self.query.text

    @property
    def fields(self) -> tuple[Field, ...]:
        return self.query.fields

    @property
    def comment(self) -> str | None:
        return self.query.comment


def group_by_file(queries: Iterable[TaggedQuery]) -> dict[str, list[TaggedQuery]]:
    """Group tagged queries by source file, keeping first-seen order."""
    groups: dict[str, list[TaggedQuery]] = {}
    for q in queries:
        groups.setdefault(q.file, []).append(q)
    return groups


def group_by_tag(queries: Iterable[TaggedQuery]) -> dict[str, list[TaggedQuery]]:
    """Group tagged queries by tag, keeping first-seen order."""
    groups: dict[str, list[TaggedQuery]] = {}
    for q in queries:
        groups.setdefault(q.tag, []).append(q)
    return groups

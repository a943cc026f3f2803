"""Tag (interface name) assignment.

Each query carries "suggested tags" computed from the tables and columns it
references, e.g. ``select id, content from message`` suggests
``("Message", "Message_id_content")``. Queries with identical result shapes
share a tag. Queries with different shapes get different tags, walking the
suggestions first and falling back to a ``_<n>`` suffix as a last resort.

Assignment is global: it must run over the queries of every file before any
file is written, since a file's queries may share tags with another file's.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from enum import IntEnum

from pgtypegen.core.errors import InternalError
from pgtypegen.core.logging import get_logger
from pgtypegen.queries.identifier import Identifier, compute_identifier
from pgtypegen.queries.models import AnalysedQuery, TaggedQuery

log = get_logger(__name__)


class Priority(IntEnum):
    EXACT = 0
    COLLISION = 1


@dataclass(frozen=True, slots=True)
class _Candidate:
    """One suggested tag of one query."""

    identifier: Identifier
    tag: str
    alternatives: int  # How many suggestions the owning query has
    priority: Priority = Priority.EXACT


def expand_candidates(
    queries: Sequence[tuple[Identifier, AnalysedQuery]],
) -> tuple[_Candidate, ...]:
    return tuple(
        _Candidate(identifier=identifier, tag=tag, alternatives=len(q.suggested_tags))
        for identifier, q in queries
        for tag in q.suggested_tags
    )


def sort_by_alternatives(candidates: Iterable[_Candidate]) -> tuple[_Candidate, ...]:
    """Queries with fewer options claim their names first."""
    return tuple(sorted(candidates, key=lambda c: c.alternatives))


def resolve_collisions(candidates: Sequence[_Candidate]) -> tuple[_Candidate, ...]:
    """Suffix every tag whose first claimant has a different identifier.

    The suffix is the position of that first claimant in *candidates*.
    """
    first_claim: dict[str, int] = {}
    for i, c in enumerate(candidates):
        first_claim.setdefault(c.tag, i)

    resolved: list[_Candidate] = []
    for c in candidates:
        first = first_claim[c.tag]
        if candidates[first].identifier == c.identifier:
            resolved.append(c)
        else:
            resolved.append(replace(c, tag=f"{c.tag}_{first}", priority=Priority.COLLISION))
    return tuple(resolved)


def sort_by_priority(candidates: Iterable[_Candidate]) -> tuple[_Candidate, ...]:
    return tuple(sorted(candidates, key=lambda c: c.priority))


def first_per_identifier(candidates: Iterable[_Candidate]) -> dict[Identifier, str]:
    tag_map: dict[Identifier, str] = {}
    for c in candidates:
        tag_map.setdefault(c.identifier, c.tag)
    return tag_map


def build_tag_map(queries: Sequence[AnalysedQuery]) -> dict[Identifier, str]:
    """Map every distinct identifier in *queries* to its tag."""
    with_identifiers = [(compute_identifier(q), q) for q in queries]
    candidates = expand_candidates(with_identifiers)
    candidates = sort_by_alternatives(candidates)
    candidates = resolve_collisions(candidates)
    candidates = sort_by_priority(candidates)
    return first_per_identifier(candidates)


def assign_tags(queries: Sequence[AnalysedQuery]) -> list[TaggedQuery]:
    """Resolve a tag for every query, in input order."""
    tag_map = build_tag_map(queries)
    tagged: list[TaggedQuery] = []
    for q in queries:
        identifier = compute_identifier(q)
        if identifier not in tag_map:
            raise InternalError.unexpected("query has no tag candidate", file=q.file, sql=q.sql)
        tagged.append(TaggedQuery(query=q, tag=tag_map[identifier]))

    log.debug("tags_assigned", queries=len(queries), tags=len(set(tag_map.values())))
    return tagged

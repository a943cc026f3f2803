"""Analysed queries, result-shape identifiers and tag assignment."""

from pgtypegen.queries.identifier import Identifier, compute_identifier
from pgtypegen.queries.models import AnalysedQuery, Field, TaggedQuery
from pgtypegen.queries.tags import assign_tags, build_tag_map

__all__ = [
    "AnalysedQuery",
    "Field",
    "TaggedQuery",
    "Identifier",
    "compute_identifier",
    "assign_tags",
    "build_tag_map",
]
